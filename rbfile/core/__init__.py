"""I/O primitives built on the file accessor."""
