"""
Interactive read loop for Tamarin.

Reads source from the terminal (continuing across lines while braces are
unbalanced), parses it, and prints either the canonical form of the parsed
program or the parser's diagnostics. Every entry is parsed by a fresh
parser; nothing is carried over between entries.
"""

from tamarin.tamarin_parser import parse_source

PROMPT = ">>> "
CONTINUATION_PROMPT = "... "


def print_parse_errors(errors: list[str]) -> None:
    print("[error] >>> parser errors:")
    for msg in errors:
        print(f"\t{msg}")


def read_entry() -> str | None:
    """Read one complete entry, or None when the user asked to leave."""
    src_lines: list[str] = []
    brace_count = 0
    while True:
        line = input(PROMPT if not src_lines else CONTINUATION_PROMPT)
        if line.strip() in ("exit", "quit") and not src_lines:
            return None
        src_lines.append(line)
        brace_count += line.count("{") - line.count("}")
        if brace_count <= 0:
            break
    return "\n".join(src_lines)


def start_repl() -> None:
    print("Tamarin REPL. Type 'exit' or 'quit' to leave.")
    while True:
        try:
            src = read_entry()
        except (EOFError, KeyboardInterrupt):
            print()
            src = None
        if src is None:
            print("Exiting Tamarin REPL.")
            return
        if not src.strip():
            continue

        program, errors = parse_source(src)
        if errors:
            print_parse_errors(errors)
            continue
        print(program)


__all__ = ["print_parse_errors", "read_entry", "start_repl"]
