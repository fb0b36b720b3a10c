from __future__ import annotations

def strip_comment(line: str) -> str:
    """Remove a '//' comment, or else a ';' comment, and surrounding blanks."""
    pos = line.find("//")
    if pos < 0:
        pos = line.find(";")
    if pos >= 0:
        line = line[:pos]
    return line.strip()

def is_label(line: str) -> bool:
    """'name:' with no interior whitespace."""
    return line.endswith(":") and not any(ch.isspace() for ch in line)

def split_mnemonic_operands(line: str):
    """Return (mnemonic lower-cased, operand text with runs of blanks collapsed)."""
    parts = line.split()
    if not parts:
        return "", ""
    return parts[0].lower(), " ".join(parts[1:])

def split_operands(op_str: str):
    if not op_str:
        return []
    # split by commas but not inside brackets
    out = []
    cur = []
    depth = 0
    for ch in op_str:
        if ch == '[':
            depth += 1
            cur.append(ch)
        elif ch == ']':
            depth = max(0, depth-1)
            cur.append(ch)
        elif ch == ',' and depth == 0:
            s = ''.join(cur).strip()
            if s:
                out.append(s)
            cur = []
        else:
            cur.append(ch)
    s = ''.join(cur).strip()
    if s:
        out.append(s)
    return out
