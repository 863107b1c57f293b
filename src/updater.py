"""Update orchestrator: resolve each import URL's target version and rewrite
the file transactionally (replace, validate, roll back on failure).

References are processed one at a time in scan order. Per-reference problems
become ``UpdateOutcome`` records; only ``RegistryFetchError`` escapes.
"""
from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Any, AsyncIterator, Callable, List, Optional, Sequence, Tuple, Type

from common.logging_utils import extra_context, is_debug_enabled, safe_url
from progress import LogReporter, ProgressEvent, Reporter, SilentReporter
from registry import REGISTRIES
from registry.base import RegistryUrl, lookup
from search import import_urls
from versioning.constraints import split_modifier
from versioning.models import ModuleReference, ResolutionStatus, UpdateOutcome
from versioning.resolver import resolve

logger = logging.getLogger(__name__)


@dataclass
class UpdateOptions:
    """Options for one run.

    Attributes:
        dry_run: resolve targets but never write the file.
        quiet: suppress progress messages.
        test: validation hook run after each write; raising (or returning an
            awaitable that raises) reverts the write. Defaults to a no-op.
        registries: registry variants in priority order; None means the
            built-in ``REGISTRIES``.
        reporter: progress consumer; defaults from ``quiet``.
        request_timeout: registry request timeout in seconds; None uses
            ``Constants.REQUEST_TIMEOUT``.
    """
    dry_run: bool = False
    quiet: bool = False
    test: Optional[Callable[[], Any]] = None
    registries: Optional[Sequence[Type[RegistryUrl]]] = None
    reporter: Optional[Reporter] = None
    request_timeout: Optional[float] = None


def _no_test() -> None:
    return None


def relocate(module: RegistryUrl) -> RegistryUrl:
    """Move a version modifier into the URL fragment.

    ``.../foo@^1.0.0/mod.ts`` becomes ``.../foo@1.0.0/mod.ts#^`` so that later
    runs read the bare version and keep the constraint.
    """
    modifier, bare = split_modifier(module.version())
    return type(module)(f"{module.at(bare).url}#{modifier}")


class Updater:
    """Drives the update of every recognized import URL in one file."""

    def __init__(self, filename: str, options: Optional[UpdateOptions] = None):
        self.filename = filename
        self.options = options or UpdateOptions()
        if self.options.registries is None:
            self.registries = tuple(REGISTRIES)
        else:
            self.registries = tuple(self.options.registries)
        self.test = self.options.test or _no_test
        if self.options.reporter is not None:
            self.reporter = self.options.reporter
        elif self.options.quiet:
            self.reporter = SilentReporter()
        else:
            self.reporter = LogReporter()

    def _progress(self, msg: str, *args: Any) -> None:
        logger.log(logging.DEBUG if self.options.quiet else logging.INFO, msg, *args)

    def content(self) -> str:
        with open(self.filename, "r", encoding="utf-8", newline="") as fh:
            return fh.read()

    async def updates(self) -> AsyncIterator[ProgressEvent]:
        """Yield one progress event per recognized reference, in scan order."""
        urls = import_urls(self.content(), self.registries)
        total = len(urls)
        for step, url in enumerate(urls, start=1):
            module = lookup(url, self.registries)
            if module is None:
                continue
            outcome = await self.update(module)
            yield ProgressEvent(step=step, total=total, url=url, outcome=outcome)

    async def run(self) -> List[UpdateOutcome]:
        results: List[UpdateOutcome] = []
        async for event in self.updates():
            self.reporter.report(event)
            results.append(event.outcome)
        return results

    async def update(self, module: RegistryUrl) -> UpdateOutcome:
        """Resolve and apply the update of a single reference.

        Raises:
            RegistryFetchError: when the registry cannot list versions.
        """
        init_url = module.url
        init_version = module.version()
        self._progress("Looking for releases: %s", init_url)
        versions = await module.all(timeout=self.options.request_timeout)

        ref = ModuleReference.from_url(init_url, init_version)
        modifier = None
        if ref.needs_relocation:
            modifier = ref.modifier
            module = relocate(module)
            ref = ModuleReference.from_url(module.url, module.version())

        resolution = resolve(ref, init_version, versions)
        if is_debug_enabled(logger):
            logger.debug(
                "Resolution",
                extra=extra_context(
                    event="decision",
                    component="updater",
                    action="resolve",
                    outcome=resolution.status.value,
                    target=safe_url(init_url),
                    resolved_version=resolution.version,
                ),
            )

        if resolution.status is ResolutionStatus.NOT_SEMVER:
            self._progress("Skip updating: %s", init_url)
            return UpdateOutcome(init_url=init_url, init_version=init_version)
        if not resolution.ok:
            return UpdateOutcome(
                init_url=init_url,
                init_version=init_version,
                message=resolution.error,
                success=False,
            )

        new_version = resolution.version
        token = f"{modifier}{new_version}" if modifier else new_version
        if new_version == module.version() and modifier is None:
            self._progress("Using latest: %s", init_url)
            return UpdateOutcome(init_url=init_url, init_version=init_version)

        failed = False
        if not self.options.dry_run:
            self._progress("Attempting update: %s -> %s", init_url, token)
            failed = await self.replace_and_validate(init_url, module.at(new_version).url)
            self._progress(
                "Update %s: %s -> %s", "failed" if failed else "successful", init_url, token
            )
        return UpdateOutcome(
            init_url=init_url,
            init_version=init_version,
            message=token,
            success=not failed,
        )

    async def replace_and_validate(self, old_url: str, new_url: str) -> bool:
        """Swap ``old_url`` for ``new_url``, run the hook, revert on failure.

        Returns:
            True when validation failed and the file was restored.
        """
        before, written = self.replace(old_url, new_url)
        try:
            result = self.test()
            if inspect.isawaitable(result):
                await result
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.warning("Validation failed for %s, reverting: %s", new_url, e)
            self.restore(before, written, old_url, new_url)
            return True
        except BaseException:
            # Interrupted mid-validation: restore before unwinding.
            self.restore(before, written, old_url, new_url)
            raise
        return False

    def replace(self, left: str, right: str) -> Tuple[str, str]:
        """Substitute every literal ``left`` with ``right`` in the file on disk.

        Returns:
            The content read and the content written.
        """
        content = self.content()
        replaced = content.replace(left, right)
        self._write(replaced)
        return content, replaced

    def restore(self, before: str, written: str, old_url: str, new_url: str) -> None:
        """Undo a replacement.

        When the file still holds exactly what was written, ``before`` goes
        back verbatim. If the hook edited the file meanwhile, only the
        substitution is reversed so those edits survive.
        """
        if self.content() == written:
            self._write(before)
        else:
            self.replace(new_url, old_url)

    def _write(self, content: str) -> None:
        with open(self.filename, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)


async def run(filename: str, options: Optional[UpdateOptions] = None) -> List[UpdateOutcome]:
    """Update every recognized import URL in ``filename``.

    Returns:
        One outcome per recognized reference, in scan order.

    Raises:
        RegistryFetchError: when any registry cannot be queried.
    """
    return await Updater(filename, options).run()


def run_sync(filename: str, options: Optional[UpdateOptions] = None) -> List[UpdateOutcome]:
    """Blocking wrapper around :func:`run` for synchronous callers."""
    return asyncio.run(run(filename, options))
