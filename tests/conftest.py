"""Global test fixtures."""

import os

import logfire

# Keep tests independent of any local .env / YAML config
os.environ.pop("UNMESSY_CONFIG_FILE", None)

# Spans and events go nowhere during tests
logfire.configure(send_to_logfire=False, console=False)
