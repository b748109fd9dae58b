"""Shared I/O thread pool for the asyncio wrappers.

The read and write primitives make blocking ``os`` calls.  Running
them in a shared ``ThreadPoolExecutor`` keeps the event loop free
without creating a pool per call.
"""

from concurrent.futures import ThreadPoolExecutor

io_pool = ThreadPoolExecutor(max_workers=8, thread_name_prefix="rbfile-io")
