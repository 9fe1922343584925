"""Detection of repeated naming templates across sibling directories."""

import re
from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from dirlens.analysis.vocabulary import MARKET_CODES

SHARED_PREFIX = re.compile(r"^([a-z]+(?:-[a-z]+)+)-")


@dataclass(frozen=True)
class SiblingPattern:
    is_project_pattern: bool = False
    pattern: Optional[str] = None  # country-based, hyphen-based, or the shared prefix


class SiblingPatternAnalyzer:
    """Recognizes one-folder-per-deployment layouts such as ``gateway-web-hk``.

    A directory whose siblings share a naming template is a deployment unit,
    not a functional category, so its name is used as a project name instead
    of being read for business keywords.
    """

    def analyze(self, sibling_names: Sequence[str]) -> SiblingPattern:
        """Test the market-code, shared-prefix and hyphen templates in order."""
        names = [name.lower() for name in sibling_names]
        if len(names) < 2:
            return SiblingPattern()

        half = len(names) * 0.5

        market_suffixes = tuple(f"-{code}" for code in MARKET_CODES)
        market_matches = [n for n in names if n.endswith(market_suffixes)]
        if len(market_matches) >= half:
            return SiblingPattern(is_project_pattern=True, pattern="country-based")

        prefixes = []
        for name in names:
            match = SHARED_PREFIX.match(name)
            if match:
                prefixes.append(match.group(1))

        if len(prefixes) >= half:
            counts: Dict[str, int] = {}
            for prefix in prefixes:
                counts[prefix] = counts.get(prefix, 0) + 1
            for prefix, count in counts.items():
                if count >= half:
                    return SiblingPattern(is_project_pattern=True, pattern=prefix)

        hyphenated = [n for n in names if "-" in n]
        if len(hyphenated) >= 2 and len(hyphenated) >= half:
            return SiblingPattern(is_project_pattern=True, pattern="hyphen-based")

        return SiblingPattern()
