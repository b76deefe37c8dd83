"""Runtime services: message dispatch and test fixture generators."""
