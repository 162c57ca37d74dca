"""
Structured exception hierarchy with execution context for the Kanban simulator.

Three failure tiers are kept apart on purpose:
- Construction-time invariant violations raise DomainInvariantError
- WIP-limit rejections are never raised; use cases return an advisory message
- Storage and configuration failures use the Storage/Configuration errors below

All exceptions include:
- correlation_id: Trace errors across a multi-day policy run
- execution_context: Simulated day, stage, card and worker involved
- resolution_hints: Actionable suggestions for common issues
- severity: CRITICAL, ERROR, RECOVERABLE, WARNING
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
import uuid


class ErrorSeverity(str, Enum):
    """Error severity levels for triage"""
    CRITICAL = "critical"      # Persisted state unusable
    ERROR = "error"            # Operation failed, requires intervention
    RECOVERABLE = "recoverable"  # Retry or fallback possible
    WARNING = "warning"        # Non-blocking issue


class ErrorCategory(str, Enum):
    """Error categories for diagnostics and resolution routing"""
    DOMAIN = "domain"                  # Card/board/WIP invariant violations
    CONFIGURATION = "configuration"    # Invalid config, missing parameters
    STORAGE = "storage"                # Save/load/import failures
    STATE = "state"                    # Policy run and session state


@dataclass
class ExecutionContext:
    """Execution context attached to every simulator error"""

    simulation_day: Optional[int] = None
    stage: Optional[str] = None
    card_id: Optional[str] = None
    worker_id: Optional[str] = None
    storage_key: Optional[str] = None

    correlation_id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize context for logging and storage"""
        return {
            k: v for k, v in self.__dict__.items()
            if v is not None and not k.startswith('_')
        }

    def format_summary(self) -> str:
        """Human-readable one-line summary"""
        parts = []
        if self.simulation_day is not None:
            parts.append(f"day={self.simulation_day}")
        if self.stage:
            parts.append(f"stage={self.stage}")
        if self.card_id:
            parts.append(f"card={self.card_id}")
        if self.worker_id:
            parts.append(f"worker={self.worker_id}")
        if self.correlation_id:
            parts.append(f"correlation_id={self.correlation_id}")
        return " | ".join(parts)


@dataclass
class ResolutionHint:
    """Actionable resolution guidance for common error patterns"""

    title: str
    description: str
    steps: List[str]
    documentation_url: Optional[str] = None


class KanbanSimError(Exception):
    """
    Base exception for the Kanban simulator with structured context.

    All simulator exceptions inherit from this class to ensure
    consistent error handling and diagnostic information.
    """

    def __init__(
        self,
        message: str,
        *,
        context: Optional[ExecutionContext] = None,
        category: ErrorCategory = ErrorCategory.DOMAIN,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        resolution_hints: Optional[List[ResolutionHint]] = None,
        original_exception: Optional[Exception] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = context or ExecutionContext()
        if metadata:
            self.context.metadata.update(metadata)
        self.category = category
        self.severity = severity
        self.resolution_hints = resolution_hints or []
        self.original_exception = original_exception

    def format_diagnostic_message(self) -> str:
        """
        Format comprehensive diagnostic message for logs and CLI display.

        Returns multi-line formatted error with:
        - Error message and severity
        - Execution context
        - Resolution hints
        - Original exception (if available)
        """
        lines = [
            f"{'='*80}",
            f"ERROR: {self.message}",
            f"Severity: {self.severity.value.upper()} | Category: {self.category.value}",
            f"{'='*80}",
            "",
            "EXECUTION CONTEXT:",
        ]

        for key, value in self.context.to_dict().items():
            if key == 'metadata' and isinstance(value, dict):
                for meta_key, meta_value in value.items():
                    lines.append(f"  {meta_key}: {meta_value}")
            else:
                lines.append(f"  {key}: {value}")

        if self.resolution_hints:
            lines.append("")
            lines.append("RESOLUTION HINTS:")
            for i, hint in enumerate(self.resolution_hints, 1):
                lines.append(f"\n{i}. {hint.title}")
                lines.append(f"   {hint.description}")
                if hint.steps:
                    lines.append("   Steps:")
                    for step in hint.steps:
                        lines.append(f"     - {step}")
                if hint.documentation_url:
                    lines.append(f"   Docs: {hint.documentation_url}")

        if self.original_exception:
            lines.append("")
            lines.append("ORIGINAL EXCEPTION:")
            lines.append(f"  {type(self.original_exception).__name__}: {str(self.original_exception)}")

        lines.append("")
        lines.append(f"{'='*80}")

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for structured logging"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "context": self.context.to_dict(),
            "resolution_hints": [
                {
                    "title": hint.title,
                    "description": hint.description,
                    "steps": hint.steps,
                    "documentation_url": hint.documentation_url,
                }
                for hint in self.resolution_hints
            ],
            "original_exception": str(self.original_exception) if self.original_exception else None,
        }


# Domain Errors
class DomainInvariantError(KanbanSimError, ValueError):
    """A domain constructor or transition helper was given invalid data.

    These only surface through direct misuse of the domain types; the
    sanctioned use cases never produce them.
    """
    def __init__(self, message: str, **kwargs):
        super().__init__(message, category=ErrorCategory.DOMAIN, severity=ErrorSeverity.ERROR, **kwargs)


# Configuration Errors
class ConfigurationError(KanbanSimError):
    """Configuration-related errors"""
    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("severity", ErrorSeverity.ERROR)
        super().__init__(message, category=ErrorCategory.CONFIGURATION, **kwargs)


class InvalidConfigurationError(ConfigurationError):
    """Invalid configuration parameter or structure"""
    def __init__(self, message: str, config_path: Optional[str] = None, **kwargs):
        if config_path:
            message = f"{message} (config_path: {config_path})"
        if "resolution_hints" not in kwargs:
            kwargs["resolution_hints"] = [
                ResolutionHint(
                    title="Fix Configuration File",
                    description="The simulator configuration failed validation",
                    steps=[
                        "Open config/simulation_config.yaml",
                        "Compare the reported field against the defaults shipped with the project",
                        "Check KANBAN_* environment overrides for typos",
                    ],
                )
            ]
        super().__init__(message, **kwargs)


# Storage Errors
class StorageError(KanbanSimError):
    """Persistence failures that are not expected input problems"""
    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("severity", ErrorSeverity.ERROR)
        super().__init__(message, category=ErrorCategory.STORAGE, **kwargs)


class StorageQuotaExceededError(StorageError):
    """Backing store is out of space; saves are dropped, not retried"""
    def __init__(self, message: str = "Storage quota exceeded", storage_key: Optional[str] = None, **kwargs):
        if storage_key:
            context = kwargs.setdefault("context", ExecutionContext())
            context.storage_key = storage_key
        if "resolution_hints" not in kwargs:
            kwargs["resolution_hints"] = [
                ResolutionHint(
                    title="Free Storage Space",
                    description="The board could not be written because the store is full",
                    steps=[
                        "Remove old exports from the storage directory",
                        "Point storage.directory at a volume with free space",
                        "Save again",
                    ],
                )
            ]
        super().__init__(message, severity=ErrorSeverity.RECOVERABLE, **kwargs)


# State Errors
class PolicyRunError(KanbanSimError):
    """Invalid request to the autonomous policy runner"""
    def __init__(self, message: str, **kwargs):
        super().__init__(message, category=ErrorCategory.STATE, severity=ErrorSeverity.ERROR, **kwargs)
