"""UK postcode helpers shared by the record model and the area classifier."""

import re

# Outward code (area + district) followed by the inward code.
UK_POSTCODE_PATTERN = re.compile(
    r"\b([A-Z]{1,2}\d[A-Z\d]?)\s*(\d[A-Z]{2})\b",
    re.IGNORECASE,
)


def compact_postcode(postcode: str) -> str:
    """Upper-case a postcode and strip every whitespace character: 'w11 2bb' → 'W112BB'."""
    return "".join(postcode.split()).upper()


def normalize_postcode(postcode: str) -> str:
    """
    Normalize a postcode for display and storage: 'w112bb' → 'W11 2BB'.

    Codes that already carry whitespace keep their outward/inward split;
    compact codes long enough to hold an inward code get a single space
    inserted before the last three characters.
    """
    parts = postcode.upper().split()
    if len(parts) > 1:
        return f"{''.join(parts[:-1])} {parts[-1]}"
    compact = "".join(parts)
    if len(compact) >= 5:
        return f"{compact[:-3]} {compact[-3:]}"
    return compact


def extract_postcode(address: str) -> str | None:
    """Find the last UK-style postcode inside a free-text address."""
    matches = UK_POSTCODE_PATTERN.findall(address or "")
    if not matches:
        return None
    outward, inward = matches[-1]
    return f"{outward.upper()} {inward.upper()}"


def outward_code(postcode: str) -> str:
    """Outward part of a normalized postcode: 'W11 2BB' → 'W11'."""
    return normalize_postcode(postcode).split(" ")[0]
