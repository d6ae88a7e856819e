import pytest

from movcpu.assembler import (Assembler, AssemblyError, assemble_source,
                              default_program, disassemble, encode, listing)
from movcpu.registers import CMP, INP, OP_A, OUT, PC, SUM, TMP, TRN


def test_encode_packs_two_digit_fields():
    assert encode(INP, OUT) == 1211
    assert encode(112, 205) == 1205


def test_builder_chains_in_order():
    asm = Assembler().inp(OP_A).set_b(TMP).set_c(CMP).set_a(SUM).out(TRN).halt()
    assert asm.instr == [1202, 903, 608, 402, 711, 0]


def test_default_program_words():
    assert default_program().instr == [1202, 1203, 608, 409, 502, 903, 711, 0]


def test_write_leaves_tail_untouched():
    cells = [7] * 100
    Assembler().mov(TMP, OUT).write_to(cells)
    assert cells[49] == 7
    assert cells[50] == 911
    assert cells[51:] == [7] * 49


def test_write_rejects_overflow():
    asm = Assembler()
    for _ in range(51):
        asm.halt()
    with pytest.raises(ValueError):
        asm.write_to([0] * 100)


@pytest.mark.parametrize("word,text", [
    (0, "HALT"),
    (1202, "INP A"),
    (1211, "INP OUT"),
    (711, "OUT TRN"),
    (608, "SETC CMP"),
    (903, "SETB TMP"),
    (409, "MOV SUM, TMP"),
    (100, "MOV PC, HALT"),
    (4050, "MOV 40, 50"),
])
def test_disassemble(word, text):
    assert disassemble(word) == text


def test_source_matches_builder():
    src = """
        ; read two numbers
        INP A
        inp b
        SETC CMP
        MOV SUM, TMP
        MOV SUB A        ; comma optional
        MOV 09, 03
        OUT TRN
        HALT
    """
    assert assemble_source(src).instr == default_program().instr


def test_disassembly_reassembles():
    for word in (1202, 608, 409, 711, 100, 4050, 9999, 0):
        assert assemble_source(disassemble(word)).instr == [word]


def test_unknown_operand_reports_line():
    with pytest.raises(AssemblyError) as exc:
        assemble_source("INP A\nMOV FOO, B\n")
    assert exc.value.lineno == 2


def test_syntax_error():
    with pytest.raises(AssemblyError, match="Line 1"):
        assemble_source("JMP 50")


def test_listing_covers_program_region():
    cells = [0] * 100
    default_program().write_to(cells)
    rows = list(listing(cells))
    assert len(rows) == 50
    assert rows[0] == (50, 1202, "INP A")
    assert rows[7] == (57, 0, "HALT")


def test_pc_is_addressable():
    assert assemble_source("MOV TMP, PC").instr == [TMP * 100 + PC]
