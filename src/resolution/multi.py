"""Batch resolution of many mods."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from common.logging_utils import Timer, extra_context, is_debug_enabled
from mods.models import DependencyResolveStatus, Mod

from .resolver import ModDependencyResolver

logger = logging.getLogger(__name__)


class MultiResolveResult:
    """Errors collected while resolving a batch of mods."""

    def __init__(self):
        self._errors: Dict[Mod, Exception] = {}

    @property
    def has_errors(self) -> bool:
        return bool(self._errors)

    @property
    def errors(self) -> Dict[Mod, Exception]:
        return dict(self._errors)

    @property
    def error_data(self) -> List[Tuple[Mod, Exception]]:
        return list(self._errors.items())

    def add_error(self, mod: Mod, error: Exception) -> None:
        if mod is None or error is None:
            raise ValueError("mod and error are required")
        self._errors[mod] = error


class MultiModDependencyResolver:
    """Resolves the dependencies of several mods, one after another.

    Args:
        resolver: Resolver handed to each ``Mod.resolve_dependencies`` call.
        on_resolved: Called with each mod whose resolution succeeded.
    """

    def __init__(
        self,
        resolver: Optional[ModDependencyResolver] = None,
        on_resolved: Optional[Callable[[Mod], None]] = None,
    ):
        self._resolver = resolver or ModDependencyResolver()
        self._on_resolved = on_resolved

    def resolve_dependencies_for_mods(
        self,
        mods_to_resolve: Iterable[Mod],
        skip_resolved_mods: bool = True,
        abort_on_error: bool = False,
    ) -> MultiResolveResult:
        """Resolve every mod and report which ones failed.

        Args:
            mods_to_resolve: Mods to resolve, in order.
            skip_resolved_mods: Leave already resolved mods alone.
            abort_on_error: Stop at the first failure instead of continuing.

        Returns:
            MultiResolveResult: The failures, keyed by mod.
        """
        if mods_to_resolve is None:
            raise ValueError("mods_to_resolve is required")

        result = MultiResolveResult()
        resolved = 0
        with Timer() as t:
            for mod in mods_to_resolve:
                if skip_resolved_mods and mod.dependency_resolve_status == DependencyResolveStatus.RESOLVED:
                    continue
                try:
                    mod.resolve_dependencies(self._resolver)
                except Exception as exc:  # pylint: disable=broad-exception-caught
                    result.add_error(mod, exc)
                    if is_debug_enabled(logger):
                        logger.debug(
                            "Mod resolution failed",
                            extra=extra_context(
                                event="decision",
                                component="multi_resolver",
                                action="resolve",
                                outcome="error",
                                target=mod.identifier,
                                error=str(exc),
                            ),
                        )
                    if abort_on_error:
                        break
                    continue
                resolved += 1
                if self._on_resolved is not None:
                    self._on_resolved(mod)

        if is_debug_enabled(logger):
            logger.debug(
                "Batch resolution finished",
                extra=extra_context(
                    event="function_exit",
                    component="multi_resolver",
                    action="resolve_dependencies_for_mods",
                    outcome="errors" if result.has_errors else "success",
                    count=resolved,
                    duration_ms=t.duration_ms(),
                ),
            )
        return result
