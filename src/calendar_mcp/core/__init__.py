"""AppleScript bridge: escaping, dates, script text, execution and decoding."""
