"""Test configuration and fixtures."""

import logfire

# Local-only spans, nothing sent or printed
logfire.configure(send_to_logfire=False, console=False)
