import asyncio
import functools
import io


def read_text(path: str) -> str:
    with open(path, encoding="utf-8", errors="replace") as file_handle:
        return file_handle.read()


async def read_text_async(path: str) -> str:
    loop = asyncio.get_running_loop()

    file_handle: io.TextIOWrapper = await loop.run_in_executor(
        None,
        functools.partial(open, path, encoding="utf-8", errors="replace"),
    )

    try:
        return await loop.run_in_executor(None, file_handle.read)

    finally:
        await loop.run_in_executor(None, file_handle.close)
