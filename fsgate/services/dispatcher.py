from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from ..config import GatewayRoot
from ..errors import ErrorKind, GatewayError, InvalidArgument, UnknownOperation, from_os_error
from ..schemas import ToolDescriptor
from .file_ops import FileOps
from .path_guard import PathGuard

logger = logging.getLogger(__name__)


class Operation(str, Enum):
    LIST_DIRECTORY = 'list_directory'
    READ_FILE = 'read_file'
    WRITE_FILE = 'write_file'
    CREATE_DIRECTORY = 'create_directory'
    DELETE_ITEM = 'delete_item'
    GET_FILE_INFO = 'get_file_info'


@dataclass(frozen=True)
class OperationSpec:
    description: str
    arguments: tuple[tuple[str, str], ...]


_PATH_ONLY = 'relative to allowed base path'

OPERATION_SPECS: dict[Operation, OperationSpec] = {
    Operation.LIST_DIRECTORY: OperationSpec(
        'List contents of a directory',
        (('path', f'Directory path to list ({_PATH_ONLY})'),),
    ),
    Operation.READ_FILE: OperationSpec(
        'Read contents of a file',
        (('path', f'File path to read ({_PATH_ONLY})'),),
    ),
    Operation.WRITE_FILE: OperationSpec(
        'Write content to a file',
        (('path', f'File path to write to ({_PATH_ONLY})'), ('content', 'Content to write')),
    ),
    Operation.CREATE_DIRECTORY: OperationSpec(
        'Create a new directory',
        (('path', f'Directory path to create ({_PATH_ONLY})'),),
    ),
    Operation.DELETE_ITEM: OperationSpec(
        'Delete a file or directory',
        (('path', f'Path to delete (file or directory, {_PATH_ONLY})'),),
    ),
    Operation.GET_FILE_INFO: OperationSpec(
        'Get information about a file or directory',
        (('path', f'Path to get info for ({_PATH_ONLY})'),),
    ),
}


def catalogue() -> list[ToolDescriptor]:
    tools: list[ToolDescriptor] = []
    for operation in Operation:
        spec = OPERATION_SPECS[operation]
        tools.append(
            ToolDescriptor(
                name=operation.value,
                description=spec.description,
                input_schema={
                    'type': 'object',
                    'properties': {name: {'type': 'string', 'description': desc} for name, desc in spec.arguments},
                    'required': [name for name, _ in spec.arguments],
                },
            )
        )
    return tools


@dataclass(frozen=True)
class Outcome:
    operation: str
    path: Optional[str] = None
    value: Any = None
    error_kind: Optional[ErrorKind] = None
    message: str = ''

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @classmethod
    def success(cls, operation: str, path: Optional[str], value: Any) -> Outcome:
        return cls(operation=operation, path=path, value=value)

    @classmethod
    def failure(cls, operation: str, path: Optional[str], kind: ErrorKind, message: str) -> Outcome:
        return cls(operation=operation, path=path, error_kind=kind, message=message)


Handler = Callable[[dict[str, str]], Any]


class Dispatcher:
    """Routes an operation name plus argument bag to exactly one file operation."""

    def __init__(self, root: GatewayRoot, ops: FileOps | None = None):
        self.root = root
        self.guard = PathGuard(root)
        self.ops = ops if ops is not None else FileOps()
        self._handlers: dict[Operation, Handler] = {
            Operation.LIST_DIRECTORY: self._list_directory,
            Operation.READ_FILE: self._read_file,
            Operation.WRITE_FILE: self._write_file,
            Operation.CREATE_DIRECTORY: self._create_directory,
            Operation.DELETE_ITEM: self._delete_item,
            Operation.GET_FILE_INFO: self._get_file_info,
        }
        missing = set(Operation) - set(self._handlers)
        if missing:
            raise RuntimeError(f'No handler registered for: {sorted(m.value for m in missing)}')

    def dispatch(self, operation_name: Any, arguments: Any) -> Outcome:
        label = operation_name if isinstance(operation_name, str) and operation_name else 'unknown tool'
        path = arguments.get('path') if isinstance(arguments, Mapping) else None
        path = path if isinstance(path, str) else None

        try:
            operation = self._parse_operation(operation_name)
            args = self._validate_arguments(operation, arguments)
            value = self._handlers[operation](args)
        except GatewayError as exc:
            logger.warning('Tool call error - %s: %s', label, exc.message)
            return Outcome.failure(label, path, exc.kind, exc.message)
        except OSError as exc:
            err = from_os_error(exc, path or '')
            logger.warning('Tool call error - %s: %s', label, err.message)
            return Outcome.failure(label, path, err.kind, err.message)
        except Exception as exc:
            logger.exception('Unexpected failure in tool %s', label)
            reason = str(exc) or exc.__class__.__name__
            message = f"Unexpected error on '{path}': {reason}" if path is not None else reason
            return Outcome.failure(label, path, ErrorKind.IO_ERROR, message)
        return Outcome.success(label, path, value)

    def _parse_operation(self, operation_name: Any) -> Operation:
        if not isinstance(operation_name, str) or not operation_name:
            raise UnknownOperation('Tool name is missing or invalid.')
        try:
            return Operation(operation_name)
        except ValueError:
            raise UnknownOperation(f'Unknown tool: {operation_name}')

    def _validate_arguments(self, operation: Operation, arguments: Any) -> dict[str, str]:
        names = [name for name, _ in OPERATION_SPECS[operation].arguments]
        bag = arguments if isinstance(arguments, Mapping) else {}
        bad = [name for name in names if not isinstance(bag.get(name), str)]
        if bad:
            quoted = ' or '.join(f"'{name}'" for name in bad)
            raise InvalidArgument(f'Missing or invalid {quoted} argument for {operation.value}')
        return {name: bag[name] for name in names}

    def _list_directory(self, args: dict[str, str]):
        return self.ops.list_directory(self.guard.resolve(args['path']), args['path'])

    def _read_file(self, args: dict[str, str]):
        return self.ops.read_file(self.guard.resolve(args['path']), args['path'])

    def _write_file(self, args: dict[str, str]):
        return self.ops.write_file(self.guard.resolve(args['path']), args['path'], args['content'])

    def _create_directory(self, args: dict[str, str]):
        return self.ops.create_directory(self.guard.resolve(args['path']), args['path'])

    def _delete_item(self, args: dict[str, str]):
        return self.ops.delete_item(self.guard.resolve(args['path']), args['path'])

    def _get_file_info(self, args: dict[str, str]):
        return self.ops.get_file_info(self.guard.resolve(args['path']), args['path'])
