"""hashdeep log handling.

This package contains:
- record: Record, the parsed form of one log line
- file: LogFile for reading and writing whole logs, including header validation
"""
