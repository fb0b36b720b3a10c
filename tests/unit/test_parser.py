import pytest
from src.a64_dump.parser import parse, parse_instruction, parse_operand, collect_labels
from src.a64_dump.ast import Instruction, Reg, Imm, Label, Mem
from src.a64_dump.isa import InstructionKind as K
from src.a64_dump.regs import Register as R
from src.a64_dump.errors import InvalidInstruction, InvalidRegister, ParseError, DumpError

def test_add_three_registers():
    [ins] = parse("add x0, x1, x2")
    assert ins.kind is K.ADD
    assert ins.operands == (Reg(R.X0), Reg(R.X1), Reg(R.X2))
    assert ins.address == 0
    assert ins.encoding is None and ins.condition is None

def test_load_with_offset():
    [ins] = parse("ldr x0, [sp, #8]")
    assert ins.kind is K.LDR
    assert ins.operands[0] == Reg(R.X0)
    mem = ins.operands[1]
    assert isinstance(mem, Mem)
    assert mem.base is R.SP and mem.offset == 8 and mem.index is None
    assert not mem.pre_indexed and not mem.post_indexed

@pytest.mark.parametrize("token, expected", [
    ("[x1]", Mem(base=R.X1)),
    ("[x29, #-16]", Mem(base=R.X29, offset=-16)),
    ("[x0, x1]", Mem(base=R.X0, index=R.X1)),
    ("[SP, #0x30]", Mem(base=R.SP, offset=0x30)),
    ("#0x30", Imm(0x30)),
    ("#0b11", Imm(3)),
    ("#-1", Imm(-1)),
    ("w3", Reg(R.W3)),
    ("lr", Reg(R.X30)),
    ("1c <main+0x1c>", Label("1c <main+0x1c>")),
    ("printf", Label("printf")),
    ("lsl #16", Label("lsl #16")),
    ("[sp, #-32]!", Label("[sp, #-32]!")),
])
def test_operand_grammar(token, expected):
    assert parse_operand(token, {}) == expected

def test_known_label_wins_over_register_lookup():
    # una etiqueta que también es un nombre de registro
    assert parse_operand("x0", {"x0": 8}) == Label("x0")

def test_zzz_is_invalid_instruction():
    with pytest.raises(InvalidInstruction) as exc:
        parse("zzz x0, x1")
    assert exc.value.mnemonic == "zzz"

def test_mnemonic_is_case_insensitive():
    [ins] = parse("B.HS 40")
    assert ins.kind is K.BCS
    assert ins.operands == (Label("40"),)

@pytest.mark.parametrize("line, exc_type", [
    ("ldr x0, [foo]", InvalidRegister),
    ("ldr x0, [sp, bar]", InvalidRegister),
    ("ldr x0, [x1, x2, lsl #3]", InvalidRegister),
    ("ldr x0, []", InvalidRegister),
    ("ldr x0, [x1, ]", InvalidRegister),
    ("mov x0, #0xZZ", ParseError),
    ("mov x0, #", ParseError),
    ("add x0, x1, #99999999999999999999", ParseError),
])
def test_errors_propagate(line, exc_type):
    with pytest.raises(exc_type):
        parse(line)

def test_parse_error_keeps_detail():
    with pytest.raises(ParseError) as exc:
        parse("mov x0, #0b12")
    assert "0b12" in str(exc.value)

def test_empty_instruction():
    with pytest.raises(ParseError):
        parse_instruction("   ")
    assert parse("") == []
    assert parse("// only a comment") == []

LOOP = """
// 1 + 2 + ... + 10
mov x0, #0         // sum = 0
mov x1, #1         // i = 1
mov x2, #10        // limit = 10

loop:
    add x0, x0, x1 // sum += i
    add x1, x1, #1 // i++
    cmp x1, x2
    b.le loop
"""

def test_two_pass_labels_and_addresses():
    insts = parse(LOOP)
    assert [i.kind for i in insts] == [K.MOV, K.MOV, K.MOV, K.ADD, K.ADD, K.CMP, K.BLE]
    assert [i.address for i in insts] == [0, 4, 8, 12, 16, 20, 24]
    assert insts[-1].operands == (Label("loop"),)
    assert insts[2].operands[1] == Imm(10)

def test_collect_labels():
    lines = ["mov x0, #0", "start:", "add x0, x0, #1", "next:", "ret"]
    assert collect_labels(lines) == {"start": 4, "next": 8}

def test_first_error_wins_without_partial_result():
    with pytest.raises(DumpError):
        parse("add x0, x1, x2\nzzz\nldr x0, [foo]")

def test_label_table_is_per_call():
    parse("here:\nb here")
    [ins] = parse("b here")
    # 'here' no es un registro: sigue siendo Label, pero por la regla de símbolo
    assert ins.operands == (Label("here"),)
    [ins] = parse("x5:\nb x5")
    assert ins.operands == (Label("x5"),)
    [ins] = parse("b x5")
    assert ins.operands == (Reg(R.X5),)

def test_instruction_is_immutable():
    [ins] = parse("nop")
    assert isinstance(ins, Instruction) and ins.operands == ()
    with pytest.raises(AttributeError):
        ins.address = 4

@pytest.mark.parametrize("line", ["ldr x0, []", "ldr x0, [x1, ]", "str x0, [ , #8]"])
def test_memory_base_and_index_are_required(line):
    with pytest.raises(InvalidRegister) as exc:
        parse(line)
    assert exc.value.name == ""
