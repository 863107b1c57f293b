"""Target version selection for a single module reference.

Pure function of the reference and the provider's version list: no I/O, no
exceptions escape for per-reference conditions.
"""

import logging
from typing import Sequence

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants

from .constraints import from_fragment, split_modifier
from .errors import ConstraintSyntaxError
from .models import ModuleReference, Resolution, ResolutionStatus
from .semver import is_prerelease, semver_or_none

logger = logging.getLogger(__name__)


def resolve(ref: ModuleReference, init_version: str, versions: Sequence[str]) -> Resolution:
    """Pick the version ``ref`` should move to.

    Args:
        ref: Reference as it stands after any modifier relocation.
        init_version: Version token as first found in the file.
        versions: Provider listing, latest first.

    Returns:
        Resolution tagged with its status; ``version`` is set only when OK.
    """
    if semver_or_none(ref.version_token) is None:
        return Resolution(status=ResolutionStatus.NOT_SEMVER)

    # Stable references stay on stable releases.
    candidates = list(versions)
    if not is_prerelease(split_modifier(init_version)[1]):
        candidates = [v for v in candidates if not is_prerelease(v)]

    try:
        constraint = from_fragment(ref)
    except ConstraintSyntaxError as e:
        return Resolution(status=ResolutionStatus.CONSTRAINT_SYNTAX_ERROR, error=str(e))

    if constraint is not None:
        compatible = []
        for v in candidates:
            parsed = semver_or_none(v)
            if parsed is not None and constraint(parsed):
                compatible.append(v)
        candidates = compatible

    if is_debug_enabled(logger):
        logger.debug(
            "Resolved candidates",
            extra=extra_context(
                event="decision",
                component="resolver",
                action="resolve",
                constraint=str(constraint) if constraint else None,
                count=len(candidates),
            ),
        )

    if not candidates:
        return Resolution(
            status=ResolutionStatus.NO_COMPATIBLE_VERSION,
            error=Constants.NO_COMPATIBLE_VERSION,
        )
    return Resolution(status=ResolutionStatus.OK, version=candidates[0])
