"""Shareable summary codes for CLI Wrapped.

This module provides functions for turning an analysis into a compact,
URL-safe share code:
- build_share_summary(): Keep only allowlisted aggregate statistics
- encode_share_summary(): Encode a summary to a URL-safe string
- decode_share_summary(): Decode a summary from a URL-safe string
- rle_encode(), rle_decode(), quantize_heatmap(): Compaction helpers

A share code never contains command arguments, file paths or raw history
lines: only base command names, counts and percentages.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .constants import (
    HEATMAP_QUANT_SCALE,
    SHARE_TOP_COMMANDS,
    SHARE_TOP_PACKAGE_MANAGERS,
    SHARE_TOP_STRUGGLES,
)
from .models import AnalysisResult

SHARE_VERSION = 1
HEATMAP_CELLS = 7 * 24
GIT_COUNTERS = 7


@dataclass
class ShareSummary:
    """Allowlisted statistics for sharing.

    Short field names keep the msgpack payload small.
    """

    # Version and context
    v: int = SHARE_VERSION
    y: int = 0  # Year
    sh: str = ""  # Shell

    # Core counts
    t: int = 0  # Total commands
    u: int = 0  # Unique commands
    lc: int = 0  # Longest command length

    # Top base commands: [command, count]
    tc: List[List] = field(default_factory=list)

    # Temporal data
    hr: List[int] = field(default_factory=list)  # 24 hourly counts
    hm: List[int] = field(default_factory=list)  # 7x24 heatmap, Sunday first
    ph: int = 0  # Peak hour
    pd: str = ""  # Peak day
    ad: Optional[List] = None  # Most active date: [YYYY-MM-DD, count]

    # Struggles: [type, count]
    st: List[List] = field(default_factory=list)

    # Git: [commits, pushes, pulls, branches, merges, rebases, stashes]
    g: Optional[List[int]] = None
    gf: Optional[str] = None  # Favourite git subcommand

    # Package managers: [manager, integer percentage]
    pm: List[List] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        result = {
            "v": self.v,
            "y": self.y,
            "sh": self.sh,
            "t": self.t,
            "u": self.u,
            "lc": self.lc,
            "tc": self.tc,
            "hr": self.hr,
            "hm": self.hm,
            "ph": self.ph,
            "pd": self.pd,
            "st": self.st,
            "pm": self.pm,
        }
        if self.ad:
            result["ad"] = self.ad
        if self.g is not None:
            result["g"] = self.g
            result["gf"] = self.gf
        return result

    @classmethod
    def from_dict(cls, d: dict) -> "ShareSummary":
        """Create from dictionary."""
        return cls(
            v=d.get("v", SHARE_VERSION),
            y=d.get("y", 0),
            sh=d.get("sh", ""),
            t=d.get("t", 0),
            u=d.get("u", 0),
            lc=d.get("lc", 0),
            tc=d.get("tc", []),
            hr=d.get("hr", []),
            hm=d.get("hm", []),
            ph=d.get("ph", 0),
            pd=d.get("pd", ""),
            ad=d.get("ad"),
            st=d.get("st", []),
            g=d.get("g"),
            gf=d.get("gf"),
            pm=d.get("pm", []),
        )


def build_share_summary(analysis: AnalysisResult, year: int, shell: str) -> ShareSummary:
    """Extract the shareable subset of an analysis.

    Args:
        analysis: Result of analyze_history()
        year: Year the summary describes
        shell: Shell the history came from

    Returns:
        ShareSummary holding aggregate statistics only
    """
    git = analysis.git_stats
    return ShareSummary(
        y=year,
        sh=str(getattr(shell, "value", shell)),
        t=analysis.total_commands,
        u=analysis.unique_commands,
        lc=analysis.longest_command_length,
        tc=[[c.command, c.count] for c in analysis.top_commands[:SHARE_TOP_COMMANDS]],
        hr=[p.count for p in analysis.time_patterns],
        hm=[cell.count for cell in analysis.hourly_heatmap],
        ph=analysis.peak_hour,
        pd=analysis.peak_day,
        ad=(
            [analysis.most_active_date.date, analysis.most_active_date.count]
            if analysis.most_active_date
            else None
        ),
        st=[[s.type, s.count] for s in analysis.struggles[:SHARE_TOP_STRUGGLES]],
        g=(
            [
                git.total_commits,
                git.total_pushes,
                git.total_pulls,
                git.branches,
                git.merges,
                git.rebases,
                git.stashes,
            ]
            if git
            else None
        ),
        gf=git.most_used_git_command if git else None,
        pm=[
            [p.manager, round(p.percentage)]
            for p in analysis.package_managers[:SHARE_TOP_PACKAGE_MANAGERS]
        ],
    )


# =============================================================================
# RLE Encoding
# =============================================================================


def rle_encode(values: List[int]) -> List[int]:
    """Run-length encode a list of integers.

    Format: [value, count, value, count, ...]

    Example: [0, 0, 0, 5, 5, 0] -> [0, 3, 5, 2, 0, 1]
    """
    if not values:
        return []

    result = []
    current_value = values[0]
    count = 1

    for v in values[1:]:
        if v == current_value:
            count += 1
        else:
            result.extend([current_value, count])
            current_value = v
            count = 1

    result.extend([current_value, count])
    return result


def rle_decode(encoded: List[int]) -> List[int]:
    """Decode run-length encoded data."""
    result = []
    for i in range(0, len(encoded), 2):
        value = encoded[i]
        count = encoded[i + 1] if i + 1 < len(encoded) else 1
        result.extend([value] * count)
    return result


def rle_encode_if_smaller(values: List[int]) -> Tuple[bool, List[int]]:
    """RLE encode only if it reduces size.

    Returns:
        Tuple of (is_rle_encoded, data)
    """
    encoded = rle_encode(values)
    if len(encoded) < len(values):
        return (True, encoded)
    return (False, values)


def quantize_heatmap(heatmap: List[int], scale: int = HEATMAP_QUANT_SCALE) -> List[int]:
    """Scale heatmap counts to 0-scale, the busiest cell becoming scale."""
    if not heatmap:
        return heatmap
    max_val = max(heatmap) or 1
    return [min(scale, round(v * scale / max_val)) for v in heatmap]


def encode_share_summary(summary: ShareSummary) -> str:
    """Encode a summary with heatmap quantization and RLE compression."""
    import base64

    import msgpack

    data: Dict[str, Any] = summary.to_dict()

    if data.get("hm"):
        quantized = quantize_heatmap(data["hm"])
        is_rle, encoded_hm = rle_encode_if_smaller(quantized)
        data["hm"] = encoded_hm
        if is_rle:
            data["hm_rle"] = True  # Flag for decoder

    packed = msgpack.packb(data, use_bin_type=True)
    return base64.urlsafe_b64encode(packed).rstrip(b"=").decode("ascii")


def decode_share_summary(encoded: str) -> ShareSummary:
    """Decode a share code.

    Raises:
        ValueError: If the code is malformed, carries fields of the wrong
            type or is from an unknown version
    """
    import base64

    import msgpack

    encoded = encoded.strip()
    padding = (4 - len(encoded) % 4) % 4
    padded = encoded + "=" * padding

    try:
        packed = base64.urlsafe_b64decode(padded)
        data = msgpack.unpackb(packed, raw=False, strict_map_key=False)
    except (ValueError, TypeError, msgpack.exceptions.UnpackException) as e:
        raise ValueError(f"Invalid share code: {e}") from e

    if not isinstance(data, dict):
        raise ValueError("Invalid share code: payload is not a mapping")
    if data.get("v") != SHARE_VERSION:
        raise ValueError(f"Unsupported share code version: {data.get('v')!r}")

    if "hm" in data:
        hm = data["hm"]
        if not _is_int_list(hm):
            raise ValueError("Invalid share code: heatmap is not a list of integers")
        if data.pop("hm_rle", False):
            if len(hm) % 2 or any(count < 0 for count in hm[1::2]):
                raise ValueError("Invalid share code: malformed heatmap encoding")
            if sum(hm[1::2]) != HEATMAP_CELLS:
                raise ValueError("Invalid share code: heatmap has the wrong size")
            data["hm"] = rle_decode(hm)
        elif hm and len(hm) != HEATMAP_CELLS:
            raise ValueError("Invalid share code: heatmap has the wrong size")

    _validate_fields(data)
    return ShareSummary.from_dict(data)


# =============================================================================
# Payload validation
# =============================================================================


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_int_list(value: Any) -> bool:
    return isinstance(value, list) and all(_is_int(v) for v in value)


def _is_pair_list(value: Any) -> bool:
    """True for [[str, int], ...]."""
    return isinstance(value, list) and all(
        isinstance(pair, list)
        and len(pair) == 2
        and isinstance(pair[0], str)
        and _is_int(pair[1])
        for pair in value
    )


# Field name -> check. A field may be absent; a present field must pass.
_FIELD_CHECKS = {
    "y": _is_int,
    "t": _is_int,
    "u": _is_int,
    "lc": _is_int,
    "ph": _is_int,
    "sh": lambda v: isinstance(v, str),
    "pd": lambda v: isinstance(v, str),
    "hr": _is_int_list,
    "tc": _is_pair_list,
    "st": _is_pair_list,
    "pm": _is_pair_list,
    "ad": lambda v: v is None or _is_pair_list([v]),
    "g": lambda v: v is None or (_is_int_list(v) and len(v) == GIT_COUNTERS),
    "gf": lambda v: v is None or isinstance(v, str),
}


def _validate_fields(data: Dict[str, Any]) -> None:
    """Raise ValueError for any present field with the wrong shape."""
    for name, check in _FIELD_CHECKS.items():
        if name in data and not check(data[name]):
            raise ValueError(f"Invalid share code: field {name!r} has the wrong type")
