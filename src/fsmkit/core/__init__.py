"""Core fsmkit modules: state machine engine, configuration and auditing."""
