"""Asyncio wrappers for the read and write primitives.

Each coroutine runs the matching blocking primitive on :data:`io_pool`.
Cancelling the awaiting task does not interrupt a call already running in
the pool.
"""

import asyncio
import functools
from typing import Optional, Union

from rbfile.common.config import Settings
from rbfile.common.errors import PathLike
from rbfile.core import read as _read
from rbfile.core import write as _write
from rbfile.core.io_pool import io_pool


async def binread(
    path: PathLike,
    length: Optional[int] = None,
    offset: Optional[int] = None,
    *,
    settings: Optional[Settings] = None,
) -> bytes:
    """Async :func:`rbfile.core.read.binread`."""
    loop = asyncio.get_running_loop()
    call = functools.partial(_read.binread, path, length, offset, settings=settings)
    return await loop.run_in_executor(io_pool, call)


async def textread(
    path: PathLike,
    length: Optional[int] = None,
    offset: Optional[int] = None,
    *,
    settings: Optional[Settings] = None,
) -> bytes:
    """Async :func:`rbfile.core.read.textread`."""
    loop = asyncio.get_running_loop()
    call = functools.partial(_read.textread, path, length, offset, settings=settings)
    return await loop.run_in_executor(io_pool, call)


async def write(
    path: PathLike,
    data: Union[bytes, bytearray, memoryview],
    offset: Optional[int] = None,
    *,
    settings: Optional[Settings] = None,
) -> int:
    """Async :func:`rbfile.core.write.write`."""
    loop = asyncio.get_running_loop()
    call = functools.partial(_write.write, path, data, offset, settings=settings)
    return await loop.run_in_executor(io_pool, call)
