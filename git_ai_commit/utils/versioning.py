"""
Semantic version tag arithmetic.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from loguru import logger


class BumpType(str, Enum):
    """Which component of the version triple to increment."""

    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"


TAG_PATTERN = re.compile(r'^v?(\d+)\.(\d+)\.(\d+)$')


@dataclass(frozen=True, order=True)
class Version:
    """A ``vMAJOR.MINOR.PATCH`` version triple."""

    major: int
    minor: int
    patch: int

    def __post_init__(self):
        if min(self.major, self.minor, self.patch) < 0:
            raise ValueError(f"Version components must be non-negative: {self.as_tuple()}")

    @classmethod
    def parse(cls, tag: str) -> Optional["Version"]:
        """Parse a tag name, returning None for anything not semver-shaped."""
        match = TAG_PATTERN.match(tag.strip())
        if not match:
            return None
        return cls(*(int(part) for part in match.groups()))

    def bump(self, bump: BumpType) -> "Version":
        """Return the next version for the given bump type."""
        bump = BumpType(bump)
        if bump is BumpType.MAJOR:
            return Version(self.major + 1, 0, 0)
        if bump is BumpType.MINOR:
            return Version(self.major, self.minor + 1, 0)
        return Version(self.major, self.minor, self.patch + 1)

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def __str__(self) -> str:
        return f"v{self.major}.{self.minor}.{self.patch}"


# First tag created in a repository without semantic version tags
INITIAL_VERSION = Version(0, 1, 0)


def latest_version(tags: Iterable[str]) -> Optional[Version]:
    """Pick the highest semantic version among the given tag names."""
    versions = []
    ignored = []

    for tag in tags:
        if not tag.strip():
            continue
        version = Version.parse(tag)
        if version is None:
            ignored.append(tag)
        else:
            versions.append(version)

    if ignored:
        logger.debug(f"Ignoring non-semver tags: {', '.join(ignored)}")

    return max(versions) if versions else None


def next_tag(existing_tags: Iterable[str], bump: BumpType = BumpType.PATCH) -> str:
    """Compute the tag that follows the highest existing one.

    Without any semantic version tag the result is ``v0.1.0`` whatever the
    bump type.
    """
    current = latest_version(existing_tags)
    if current is None:
        logger.info(f"No semantic version tags found, starting at {INITIAL_VERSION}")
        return str(INITIAL_VERSION)

    new_version = current.bump(bump)
    logger.debug(f"Bumping {current} ({BumpType(bump).value}) -> {new_version}")
    return str(new_version)
