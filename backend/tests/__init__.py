"""PollWatch test suite."""
