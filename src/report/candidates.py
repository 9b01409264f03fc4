"""Candidate list export for a downstream rewrite/removal utility."""
from pathlib import Path
from typing import List

from src.analyzer.reference_resolver import ReferenceVerdict, unreferenced


def write_candidate_list(path: str | Path, verdicts: List[ReferenceVerdict]) -> int:
    """Write unreferenced names, one per line, sorted.

    Written to a temp file first and renamed into place, so a consumer
    never sees a half-written list.

    Args:
        path: Destination file
        verdicts: Symbol (or asset) verdicts

    Returns:
        Number of names written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    names = [verdict.name for verdict in unreferenced(verdicts)]

    temp_path = path.with_suffix(path.suffix + '.tmp')
    with open(temp_path, 'w', encoding='utf-8') as f:
        for name in names:
            f.write(name + "\n")
    temp_path.replace(path)

    return len(names)
