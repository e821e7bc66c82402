import asyncio
import contextvars
import datetime
import functools
import io
import os
import pathlib
import sys
import threading
from collections import defaultdict
from typing import (
    Any,
    Callable,
    Dict,
    TypeVar,
)

import msgspec

from dnsconf.logging.config import LoggingConfig, StreamType
from dnsconf.logging.models import Entry, Log, LogLevel


T = TypeVar('T', bound=Entry)

DEFAULT_TEMPLATE = "{timestamp} - {level} - {thread_id} - {filename}:{function_name}.{line_number} - {message}"
ERROR_TEMPLATE = "{timestamp} - {level} - {thread_id}.{filename}:{function_name}.{line_number} - {error}"


class LoggerStream:
    def __init__(
        self,
        name: str | None = None,
        template: str | None = None,
        filename: str | None = None,
        directory: str | None = None,
        models: dict[
            str,
            tuple[
                type[T],
                dict[str, Any],
            ]
        ] | None = None,
    ) -> None:
        if name is None:
            name = "default"

        self._name = name
        self._default_template = template
        self._default_logfile = filename
        self._default_log_directory = directory

        self._files: Dict[str, io.BufferedWriter] = {}
        self._file_locks: Dict[str, threading.Lock] = defaultdict(threading.Lock)
        self._default_logfile_path: str | None = None

        self._config = LoggingConfig()
        self._models: Dict[str, tuple[type[Entry], dict[str, Any]]] = {}

        if models is None:
            models = {}

        for model_name, config in models.items():
            model, defaults = config

            self._models[model_name] = (
                model,
                defaults
            )

        self._models.update({
            'default': (
                Entry,
                {
                    'level': LogLevel.INFO
                }
            )
        })

    @property
    def name(self):
        return self._name

    def open_file(
        self,
        filename: str,
        directory: str | None = None,
        is_default: bool = False,
    ):
        logfile_path = self._to_logfile_path(filename, directory=directory)

        with self._file_locks[logfile_path]:
            if self._files.get(logfile_path) is None or self._files[logfile_path].closed:
                self._open_file(logfile_path)

        if is_default:
            self._default_logfile_path = logfile_path

        return logfile_path

    def _open_file(
        self,
        logfile_path: str,
    ):
        resolved_path = pathlib.Path(logfile_path).absolute().resolve()
        logfile_directory = str(resolved_path.parent)

        if not os.path.exists(logfile_directory):
            os.makedirs(logfile_directory)

        self._files[logfile_path] = open(str(resolved_path), "ab+")

    def _to_logfile_path(
        self,
        filename: str,
        directory: str | None = None,
    ):
        if directory is None:
            directory = self._config.directory or os.path.join(os.getcwd(), "logs")

        return os.path.join(directory, filename)

    def to_entry(
        self,
        message: str,
        name: str = 'default',
    ):
        model, defaults = self._models.get(
            name,
            self._models.get('default')
        )

        return model(
            message=message,
            **defaults
        )

    def emit(
        self,
        entry: T | Log[T],
        template: str | None = None,
        path: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ):
        filename: str | None = None
        directory: str | None = None

        if path:
            logfile_path = pathlib.Path(path)
            is_logfile = len(logfile_path.suffix) > 0

            filename = logfile_path.name if is_logfile else None
            directory = str(logfile_path.parent.absolute()) if is_logfile else str(logfile_path.absolute())

        if template is None:
            template = self._default_template

        if filename is None:
            filename = self._default_logfile

        if directory is None:
            directory = self._default_log_directory

        if filename or directory:
            self._log_to_file(
                entry,
                filename=filename,
                directory=directory,
                filter=filter,
            )

        else:
            self._log(
                entry,
                template=template,
                filter=filter,
            )

    async def log(
        self,
        entry: T | Log[T],
        template: str | None = None,
        path: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ):
        if not isinstance(entry, Log):
            frame = sys._getframe(1)
            code = frame.f_code

            entry = Log(
                entry=entry,
                filename=code.co_filename,
                function_name=code.co_name,
                line_number=frame.f_lineno,
            )

        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None,
            functools.partial(
                contextvars.copy_context().run,
                self.emit,
                entry,
                template=template,
                path=path,
                filter=filter,
            ),
        )

    def _log(
        self,
        entry_or_log: T | Log[T],
        template: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ):
        entry: Entry = None
        if isinstance(entry_or_log, Log):
            entry = entry_or_log.entry

        else:
            entry = entry_or_log

        if self._config.enabled(self._name, entry.level) is False:
            return

        if filter and filter(entry) is False:
            return

        if template is None:
            template = DEFAULT_TEMPLATE

        if isinstance(entry_or_log, Log):
            log_file = entry_or_log.filename
            line_number = entry_or_log.line_number
            function_name = entry_or_log.function_name

        else:
            log_file, line_number, function_name = self._find_caller()

        stream = sys.stdout if self._config.output == StreamType.STDOUT else sys.stderr

        try:
            stream.write(
                entry.to_template(
                    template,
                    context={
                        "filename": log_file,
                        "function_name": function_name,
                        "line_number": line_number,
                        "thread_id": threading.get_native_id(),
                        "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
                    },
                )
                + "\n"
            )
            stream.flush()

        except (OSError, KeyError, ValueError) as err:
            self._write_error(entry, err, log_file, function_name, line_number)

    def _log_to_file(
        self,
        entry_or_log: T | Log[T],
        filename: str | None = None,
        directory: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ):
        entry: Entry = None
        if isinstance(entry_or_log, Log):
            entry = entry_or_log.entry

        else:
            entry = entry_or_log

        if self._config.enabled(self._name, entry.level) is False:
            return

        if filter and filter(entry) is False:
            return

        if filename and directory:
            logfile_path = self._to_logfile_path(
                filename,
                directory=directory,
            )

        elif self._default_logfile_path:
            logfile_path = self._default_logfile_path

        else:
            filename = filename or "logs.json"
            logfile_path = self._to_logfile_path(filename, directory=directory)

        if isinstance(entry_or_log, Log):
            log_file = entry_or_log.filename
            line_number = entry_or_log.line_number
            function_name = entry_or_log.function_name

            log = entry_or_log

        else:
            log_file, line_number, function_name = self._find_caller()

            log = Log(
                entry=entry,
                filename=log_file,
                function_name=function_name,
                line_number=line_number
            )

        try:
            if self._files.get(logfile_path) is None or self._files[logfile_path].closed:
                with self._file_locks[logfile_path]:
                    self._open_file(logfile_path)

            with self._file_locks[logfile_path]:
                self._write_to_file(log, logfile_path)

        except OSError as err:
            self._write_error(entry, err, log_file, function_name, line_number)

    def _write_to_file(
        self,
        log: Log,
        logfile_path: str,
    ):
        if (
            logfile := self._files.get(logfile_path)
        ) and (
            logfile.closed is False
        ):
            logfile.write(msgspec.json.encode(log) + b"\n")
            logfile.flush()

    def _write_error(
        self,
        entry: Entry,
        err: Exception,
        log_file: str,
        function_name: str,
        line_number: int,
    ):
        if sys.stderr.closed:
            return

        sys.stderr.write(
            entry.to_template(
                ERROR_TEMPLATE,
                context={
                    "filename": log_file,
                    "function_name": function_name,
                    "line_number": line_number,
                    "error": str(err),
                    "thread_id": threading.get_native_id(),
                    "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
                },
            )
            + "\n"
        )

    def _find_caller(self):
        """
        Find the stack frame of the caller so that we can note the source
        file name, line number and function name.
        """
        frame = sys._getframe(3)
        code = frame.f_code

        return (
            code.co_filename,
            frame.f_lineno,
            code.co_name,
        )

    def close_file(self, filename: str, directory: str | None = None):
        logfile_path = self._to_logfile_path(filename, directory=directory)
        self._close_file_at_path(logfile_path)

    def _close_file_at_path(self, logfile_path: str):
        with self._file_locks[logfile_path]:
            logfile = self._files.pop(logfile_path, None)
            if logfile and logfile.closed is False:
                logfile.close()

    def close(self):
        for logfile_path in list(self._files):
            self._close_file_at_path(logfile_path)
