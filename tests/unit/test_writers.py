import pytest
from src.a64_dump.writers import (
    format_source, basic_interpret, to_table_lines, render_table,
    render_comparison, instruction_count, write_markdown, TABLE_HEADER,
)
from src.a64_dump.objdump import DumpEntry, ObjdumpListing, helper_note
from src.a64_dump.parser import parse_instruction

def entry(source, asm, parsed=True):
    return DumpEntry(
        source_line=0 if source else None,
        source=source,
        address="400580",
        machine_code="d503201f",
        asm=asm,
        parsed=parse_instruction(asm) if parsed else None,
    )

# --- format_source ---
def test_format_source_short_lines_untouched():
    assert format_source("return a + b;") == "return a + b;"
    assert format_source("int f(int a, <br> int b)") == "int f(int a, int b)"

def test_format_source_cuts_at_separator():
    code = "int compute(int alpha, int beta, int gamma, int delta, int epsilon, int zeta, int eta)"
    assert format_source(code, 40) == "int compute(int alpha, int beta, int..."
    assert format_source(code, 200) == code

def test_format_source_exact_cut():
    assert format_source("abc, defghijk", 8) == "abc,..."
    assert format_source("abcdefghijkl", 8) == "abcde..."

# --- basic_interpret ---
@pytest.mark.parametrize("asm, expected", [
    ("ldp\tx29, x30, [sp], #16", "load x29 and x30 from memory"),
    ("stp x19, x20, [sp, #16]", "store x19 and x20 to memory"),
    ("ldr x0, [sp, #8]", "load from memory into x0"),
    ("str w0, [sp, #12]", "store w0 to memory"),
    ("bl 400400 <puts@plt>", "call function"),
    ("b.ne 4005c0", "conditional jump"),
    ("b 4005c0", "unconditional jump"),
    ("ccmp w0, #0x1, #0x0, ne", "conditional compare"),
    ("mov w0, w1", "w0 = w1"),
    ("add sp, sp, #0x10", "addition"),
    ("sub sp, sp, #0x10", "subtraction"),
    ("cmp w0, #0x9", "compare"),
    ("ret", "return from function"),
    ("nop", "no operation"),
    (".inst 0xdeadbeef", "instruction"),
])
def test_basic_interpret(asm, expected):
    assert basic_interpret(asm) == expected

# --- tabla ---
def test_table_header_and_rows():
    entries = [
        entry("int main(void)", "sub sp, sp, #0x10"),
        entry("int main(void)", "mov w0, #0x0"),
        entry("return 0;", "add sp, sp, #0x10"),
        entry("return 0;", "ret"),
    ]
    lines = to_table_lines(entries)
    assert lines[:2] == TABLE_HEADER
    assert lines[2] == "| int main(void) | sub sp, sp, #0x10 | SP = SP - 0x10 |"
    # la misma línea de fuente no se repite
    assert lines[3] == "|  | mov w0, #0x0 | W0 = 0x0 |"
    assert lines[4] == "| return 0; | add sp, sp, #0x10 | SP = SP + 0x10 |"
    assert lines[5] == "|  | ret | return from subroutine |"

def test_source_reappearing_after_change_is_printed_again():
    entries = [entry("a = 1;", "nop"), entry("b = 2;", "nop"), entry("a = 1;", "nop")]
    sources = [line.split("|")[1].strip() for line in to_table_lines(entries)[2:]]
    assert sources == ["a = 1;", "b = 2;", "a = 1;"]

def test_unclassified_rows_use_basic_meaning():
    lines = to_table_lines([entry("", ".inst 0xdeadbeef", parsed=False)])
    assert lines[2] == "|  | .inst 0xdeadbeef | instruction |"

def test_note_row_spans_source_column():
    note = DumpEntry(None, helper_note("f.part.0"), "", "", "")
    lines = to_table_lines([entry("x++;", "nop"), note])
    assert lines[-1] == f"| {helper_note('f.part.0')} | | |"

def test_render_table_empty_function():
    assert render_table([]) == "\n".join(TABLE_HEADER) + "\n"

def test_long_source_is_shortened_in_table():
    long_source = "printf(\"%d %d %d\\n\", first_value, second_value, third_value, fourth_value, fifth);"
    lines = to_table_lines([entry(long_source, "nop")], source_width=30)
    cell = lines[2].split(" | ")[0][2:]
    assert cell.endswith("...")
    assert len(cell) <= 33

# --- comparación ---
DUMP = """
0000000000400580 <f>:
int f(void) {
  400580:\td10043ff \tsub\tsp, sp, #0x10
  400584:\t52800000 \tmov\tw0, #0x0
  400588:\t910043ff \tadd\tsp, sp, #0x10
  40058c:\td65f03c0 \tret
"""

def test_render_comparison_sections_and_statistics():
    full = ObjdumpListing(DUMP).extract_function("f")
    short = full[-1:]
    with_note = short + [DumpEntry(None, helper_note("f.part.0"), "", "", "")]
    report = render_comparison({"O0": full, "O1": short, "O2": with_note})
    assert report.startswith("## Optimization level comparison\n")
    assert "### O0 (no optimization)" in report
    assert "### O1 (basic optimization)" in report
    assert "### O2 (aggressive optimization)" in report
    assert report.index("### O0") < report.index("### O1") < report.index("### O2") < report.index("### Statistics")
    assert "- O0: 4 instructions" in report
    assert "- O1: 1 instructions" in report
    assert "- O2: 1 instructions" in report

def test_instruction_count_skips_notes():
    note = DumpEntry(None, helper_note("f.part.0"), "", "", "")
    assert instruction_count([entry("", "nop"), note]) == 1
    assert instruction_count([]) == 0

def test_write_markdown(tmp_path):
    path = tmp_path / "out.md"
    write_markdown("# hi\n", str(path))
    assert path.read_text(encoding="utf-8") == "# hi\n"

@pytest.mark.parametrize("asm, expected", [
    ("ldp\tx29, x30, [x0, w1, sxtw]", "load x29 and x30 from memory"),
    ("stp\tq0, q1, [sp, #32]", "store q0 and q1 to memory"),
    ("mov\tx0, x1", "x0 = x1"),
    ("mov\tw0, #0x0                   \t// #0", "w0 = #0x0"),
    ("ldp", "load register pair from memory"),
    ("mov\tx0", "move"),
])
def test_basic_interpret_takes_every_operand(asm, expected):
    assert basic_interpret(asm) == expected
