import asyncio
import contextvars
from typing import Any, TypeVar

from .logger_stream import LoggerStream


T = TypeVar('T')


class LoggerContext:
    def __init__(
        self,
        name: str | None = None,
        template: str | None = None,
        filename: str | None = None,
        directory: str | None = None,
        nested: bool = False,
        models: dict[
            str,
            tuple[
                type[T],
                dict[str, Any],
            ]
        ] | None = None,
    ) -> None:
        self.name = name
        self.template = template
        self.filename = filename
        self.directory = directory
        self.stream = LoggerStream(
            name=name,
            template=template,
            filename=filename,
            directory=directory,
            models=models,
        )
        self.nested = nested

    def __enter__(self):
        if self.filename:
            self.stream.open_file(
                self.filename,
                directory=self.directory,
                is_default=True,
            )

        return self.stream

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.nested is False:
            self.stream.close()

    async def __aenter__(self):
        if self.filename:
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(
                None,
                contextvars.copy_context().run,
                self.__enter__,
            )

        return self.stream

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.nested is False:
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(
                None,
                self.stream.close,
            )
