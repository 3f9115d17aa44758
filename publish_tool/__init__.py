"""publish-tool: bump a Gradle module's version and publish it."""
