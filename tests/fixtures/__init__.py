"""Sample data shared by the test suite."""
