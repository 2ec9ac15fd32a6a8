from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, MutableMapping, Optional, Tuple


DEFAULT_ENV_FILES: Tuple[str, ...] = (".env", "durations.env")


@dataclass(frozen=True)
class DotenvResult:
    path: Path
    loaded: Dict[str, str]


def _unquote(val: str) -> str:
    v = val.strip()
    if len(v) >= 2 and v[0] == v[-1] and v[0] in ("'", '"'):
        return v[1:-1]
    # Unquoted values may carry a trailing " # comment".
    hash_at = v.find(" #")
    if hash_at != -1:
        v = v[:hash_at].rstrip()
    return v


def parse_dotenv_lines(lines: Iterable[str]) -> Dict[str, str]:
    """
    Reads KEY=VALUE pairs.

    Blank lines and '#' comments are skipped, an optional leading "export "
    is accepted, and values may be single- or double-quoted. No multiline
    values and no ${VAR} expansion.
    """
    out: Dict[str, str] = {}
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        key, sep, val = line.partition("=")
        key = key.strip()
        if not sep or not key:
            continue
        out[key] = _unquote(val)
    return out


def find_default_env_file(cwd: Path) -> Optional[Path]:
    for name in DEFAULT_ENV_FILES:
        candidate = cwd / name
        if candidate.is_file():
            return candidate
    return None


def load_env_file(
    path: Path,
    *,
    environ: MutableMapping[str, str],
    override: bool = False,
) -> DotenvResult:
    data = parse_dotenv_lines(path.read_text(encoding="utf-8").splitlines())
    loaded = {k: v for k, v in data.items() if override or k not in environ}
    environ.update(loaded)
    return DotenvResult(path=path, loaded=loaded)
