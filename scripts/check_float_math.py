#!/usr/bin/env python3
"""Float linting script for detfp.

Scans the package for patterns that would bring binary floating point into
fixed-point code and break bit-identical results across machines. It should
be run as part of CI to prevent regressions.

Usage:
    python scripts/check_float_math.py [--verbose]

Exit codes:
    0 - No issues found
    1 - Issues found (with details printed)
"""

import argparse
import re
import sys
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path


@dataclass
class Issue:
    """A detected float pattern."""

    file: Path
    line_num: int
    line: str
    pattern: str
    severity: str  # CRITICAL, HIGH
    message: str
    suggestion: str | None = None


# Directories to scan
SCAN_DIRS = ["detfp"]

# Files/directories to completely skip
SKIP_PATHS = ["__pycache__"]

# Allowlist: specific files where certain patterns are acceptable
# Format: {file_pattern: [list of allowed pattern names]}
ALLOWLIST: dict[str, list[str]] = {
    "models/types.py": ["float_isinstance"],  # Rejects float input
}

_FLOAT_LITERAL = re.compile(r"(?<![\w.])(\d+\.\d*|\.\d+|\d+[eE][+-]?\d+)(?![\w.])")
_TRUE_DIVISION = re.compile(r"(\w+|\))\s*/(?!/)\s*(\w+|\()")


def should_skip_file(path: Path) -> bool:
    """Check if file should be completely skipped."""
    path_str = str(path)
    return any(skip in path_str for skip in SKIP_PATHS)


def is_allowlisted(path: Path, pattern_name: str) -> bool:
    """Check if a pattern is allowlisted for this file."""
    path_str = path.as_posix()
    for file_pattern, allowed in ALLOWLIST.items():
        if file_pattern in path_str and pattern_name in allowed:
            return True
    return False


class DocstringTracker:
    """Track docstring state across multiple lines."""

    def __init__(self) -> None:
        self.in_docstring = False
        self.docstring_char: str | None = None

    def process_line(self, line: str) -> tuple[str, bool]:
        """Process a line and return (stripped_line, is_in_docstring).

        Returns the line with strings/comments removed and whether
        the line is entirely within a docstring.
        """
        result = []
        i = 0
        line_start_in_docstring = self.in_docstring

        while i < len(line):
            if line[i : i + 3] in ('"""', "'''"):
                if not self.in_docstring:
                    self.in_docstring = True
                    self.docstring_char = line[i : i + 3]
                    result.append("   ")
                    i += 3
                    continue
                elif line[i : i + 3] == self.docstring_char:
                    self.in_docstring = False
                    self.docstring_char = None
                    result.append("   ")
                    i += 3
                    continue

            if self.in_docstring:
                result.append(" ")
                i += 1
                continue

            char = line[i]

            if char == "#":
                result.append(" " * (len(line) - i))
                break

            if char in ('"', "'") and (i == 0 or line[i - 1] != "\\"):
                quote_char = char
                result.append(" ")
                i += 1
                while i < len(line):
                    if line[i] == quote_char and line[i - 1] != "\\":
                        result.append(" ")
                        i += 1
                        break
                    result.append(" ")
                    i += 1
                continue

            result.append(char)
            i += 1

        entirely_in_docstring = line_start_in_docstring and self.in_docstring

        return "".join(result), entirely_in_docstring


def _code_lines(lines: list[str]) -> Iterator[tuple[int, str, str]]:
    """Yield (line_num, code, original) with strings, comments and docstrings blanked."""
    tracker = DocstringTracker()
    for i, original_line in enumerate(lines, 1):
        stripped = original_line.strip()
        if stripped.startswith("#") or stripped.startswith(("from ", "import ")):
            tracker.process_line(original_line)
            continue
        code, in_docstring = tracker.process_line(original_line)
        if in_docstring:
            continue
        yield i, code, original_line


def check_float_literals(path: Path, lines: list[str]) -> Iterator[Issue]:
    """Check for float literals such as 0.5 or 1e18."""
    for i, code, original_line in _code_lines(lines):
        match = _FLOAT_LITERAL.search(code)
        if match:
            yield Issue(
                file=path,
                line_num=i,
                line=original_line.rstrip(),
                pattern="float literal",
                severity="CRITICAL",
                message=f"Float literal {match.group(1)} in fixed-point code",
                suggestion="Use an integer (10**18 rather than 1e18)",
            )


def check_true_division(path: Path, lines: list[str]) -> Iterator[Issue]:
    """Check for true division (/), which always produces a float on ints."""
    for i, code, original_line in _code_lines(lines):
        if "/" not in code.replace("//", "  "):
            continue
        if _TRUE_DIVISION.search(code.replace("//", "  ")):
            yield Issue(
                file=path,
                line_num=i,
                line=original_line.rstrip(),
                pattern="true division",
                severity="HIGH",
                message="True division produces a float",
                suggestion="Use // on raw integers or the div() method",
            )


def check_float_conversion(path: Path, lines: list[str]) -> Iterator[Issue]:
    """Check for float() calls and float type checks."""
    for i, code, original_line in _code_lines(lines):
        if "float(" in code:
            yield Issue(
                file=path,
                line_num=i,
                line=original_line.rstrip(),
                pattern="float conversion",
                severity="CRITICAL",
                message="float() in fixed-point code",
                suggestion="Keep values as scaled integers",
            )
        elif re.search(r"\bfloat\b", code) and not is_allowlisted(path, "float_isinstance"):
            yield Issue(
                file=path,
                line_num=i,
                line=original_line.rstrip(),
                pattern="float usage",
                severity="HIGH",
                message="Reference to float type",
            )


def scan_file(path: Path) -> list[Issue]:
    """Scan a single file for float patterns."""
    if should_skip_file(path):
        return []

    try:
        lines = path.read_text().split("\n")
    except OSError as e:
        print(f"Warning: Could not read {path}: {e}", file=sys.stderr)
        return []

    issues: list[Issue] = []
    issues.extend(check_float_literals(path, lines))
    issues.extend(check_true_division(path, lines))
    issues.extend(check_float_conversion(path, lines))
    return issues


def scan_tree(base_dir: Path) -> list[Issue]:
    """Scan every Python file under the SCAN_DIRS of base_dir."""
    issues: list[Issue] = []
    for scan_dir in SCAN_DIRS:
        dir_path = base_dir / scan_dir
        if dir_path.exists():
            for py_file in sorted(dir_path.rglob("*.py")):
                issues.extend(scan_file(py_file))
    return issues


def print_report(issues: list[Issue], verbose: bool) -> None:
    """Print the audit report."""
    if not issues:
        print("✓ No float patterns found!")
        return

    print(f"\n{'=' * 70}")
    print("FLOAT MATH AUDIT RESULTS")
    print(f"{'=' * 70}")
    for sev in ["CRITICAL", "HIGH"]:
        count = sum(1 for issue in issues if issue.severity == sev)
        if count > 0:
            print(f"  {sev:10} {count:4}")
    print(f"  {'TOTAL':10} {len(issues):4}")
    print(f"{'=' * 70}\n")

    for issue in issues:
        print(f"  [{issue.severity}] {issue.file}:{issue.line_num}")
        print(f"    {issue.pattern}: {issue.message}")
        if verbose:
            print(f"    > {issue.line.strip()[:70]}")
            if issue.suggestion:
                print(f"    Suggestion: {issue.suggestion}")
        print()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Float linter for detfp")
    parser.add_argument("--verbose", "-v", action="store_true")
    parser.add_argument(
        "--root",
        type=Path,
        default=Path(__file__).parent.parent,
        help="Repository root to scan (default: this checkout)",
    )
    args = parser.parse_args(argv)

    issues = scan_tree(args.root)
    print_report(issues, args.verbose)

    if issues:
        print("❌ Float patterns found - fixed-point code must stay integer-only")
        return 1
    print("✓ No blocking issues")
    return 0


if __name__ == "__main__":
    sys.exit(main())
