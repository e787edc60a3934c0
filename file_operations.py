#!/usr/bin/env python3
"""
File Operations Module for palaios

Recursive directory deletion, one item at a time, with per-item results so a
failure never stops the rest of a batch.
"""

import logging
import pathlib
import shutil
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger("palaios.file_operations")


class OperationType(Enum):
    """Type of file operation"""

    DELETE = "delete"


@dataclass
class FileOperation:
    """Represents a planned file operation"""

    target_path: pathlib.Path
    operation_type: OperationType = OperationType.DELETE
    identifier: str = ""  # Optional identifier for tracking

    def __post_init__(self):
        if not self.identifier:
            self.identifier = str(self.target_path)


@dataclass
class OperationResult:
    """Result of a file operation"""

    operation: FileOperation
    success: bool
    error_message: Optional[str] = None


class FileOperations:
    """Deletes directory trees and reports the outcome of each"""

    def __init__(self, progress_callback: Optional[Callable[[str], None]] = None):
        """Initialize with optional progress callback"""
        self.progress_callback = progress_callback

    def execute_operation(self, operation: FileOperation) -> OperationResult:
        """Execute a single file operation"""
        try:
            if operation.operation_type == OperationType.DELETE:
                shutil.rmtree(operation.target_path)
            return OperationResult(operation=operation, success=True)

        except OSError as e:
            logger.debug("Failed to delete %s: %s", operation.target_path, e)
            return OperationResult(operation=operation, success=False, error_message=str(e))

    def execute_batch_operations(
        self, operations: list[FileOperation]
    ) -> tuple[list[OperationResult], list[OperationResult]]:
        """Execute operations in order and return success/failure lists"""
        if not operations:
            return [], []

        successful_operations = []
        failed_operations = []

        for i, operation in enumerate(operations):
            if self.progress_callback:
                self.progress_callback(f"Deleting {operation.identifier} ({i + 1}/{len(operations)})")

            result = self.execute_operation(operation)

            if result.success:
                successful_operations.append(result)
            else:
                failed_operations.append(result)

        return successful_operations, failed_operations

    def plan_deletions(self, paths: list[str]) -> list[FileOperation]:
        """Create planned delete operations, keeping order and duplicates"""
        return [FileOperation(target_path=pathlib.Path(p), identifier=p) for p in paths]
