"""Framework unit tests: wait engine, element actions, lifecycle, config."""
