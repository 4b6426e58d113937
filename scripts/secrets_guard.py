import re
import sys
from pathlib import Path

# Shapes an explorer key takes when it leaks into a file
PATTERNS = [
    re.compile(r"(?i)api(_|-)?key\s*[:=]\s*['\"]?[A-Z0-9]{34}\b"),
    re.compile(r"(?i)apikey=[A-Z0-9]{34}\b"),
    re.compile(r"(?i)etherscan[^\n]{0,40}['\"][A-Z0-9]{34}['\"]"),
]

ALLOWLIST_EXT = {".png", ".jpg", ".jpeg", ".gif", ".pdf", ".csv"}


def file_text(p: Path) -> str:
    try:
        return p.read_text(encoding="utf-8", errors="ignore")
    except OSError:
        return ""


def scan(paths):
    violations = []
    for path in paths:
        p = Path(path)
        if not p.is_file() or p.suffix.lower() in ALLOWLIST_EXT:
            continue
        text = file_text(p)
        for pat in PATTERNS:
            for m in pat.finditer(text):
                if "# secrets: allow" in text[max(0, m.start()-120):m.end()+120]:
                    continue
                violations.append((str(p), m.group(0)[:80]))
    return violations


def main(paths) -> int:
    violations = scan(paths)
    if violations:
        print("Potential API keys detected:")
        for f, frag in violations:
            print(f" - {f}: {frag}")
        print("If these are false positives, add an inline comment: # secrets: allow")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
