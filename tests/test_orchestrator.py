"""Integration tests for the generate and list pipelines."""

from __future__ import annotations

from pathlib import Path

import pytest

from wavegen.errors import EntityNotFound, MissingArchitecture, ParseError
from wavegen.models import ParsedEntity
from wavegen.orchestrator import Orchestrator, generate_script

from tests._fixtures.source_builder import SourceBuilder

TB_COUNTER = """
    library ieee;
    use ieee.std_logic_1164.all;

    entity tb_counter is
    end entity;

    architecture sim of tb_counter is
        -- color indigo
        signal clk : std_logic;
        signal rst : std_logic; -- omit
        signal data : std_logic_vector(3 downto 0);
        -- empty
        -- add signal dut.state, color green
    begin
    end architecture;
"""

BROKEN = """
    entity broken is end;
    architecture rtl of broken is
        signal a : std_logic;
"""


def test_run_generate_writes_script(source_builder: SourceBuilder, tmp_path: Path) -> None:
    source_builder.write({"tb/tb_counter.vhd": TB_COUNTER})
    output = tmp_path / "out" / "view.tcl"

    outcome = Orchestrator().run_generate(source_builder.path(), "tb_counter", output)

    assert outcome.path == output
    assert outcome.entity == "tb_counter"
    assert outcome.source.name == "tb_counter.vhd"
    assert outcome.shown == 3
    assert outcome.suppressed == 1

    lines = output.read_text(encoding="utf-8").splitlines()
    assert 'gtkwave::addSignalsFromList "top.tb_counter.clk"' in lines
    assert 'gtkwave::addSignalsFromList "top.tb_counter.rst"' not in lines
    assert 'gtkwave::addSignalsFromList "top.tb_counter.dut.state"' in lines
    assert "gtkwave::/Edit/Insert_Blank" in lines
    assert lines.count("gtkwave::/Edit/Color_Format/Indigo") == 2
    assert "gtkwave::/Edit/Color_Format/Green" in lines
    assert lines.index("gtkwave::/Edit/Insert_Blank") < lines.index(
        'gtkwave::addSignalsFromList "top.tb_counter.dut.state"'
    )


def test_run_generate_matches_entity_name_case_insensitively(
    source_builder: SourceBuilder, tmp_path: Path
) -> None:
    source_builder.write({"tb.vhd": TB_COUNTER})
    outcome = Orchestrator().run_generate(source_builder.path(), "TB_Counter", tmp_path / "v.tcl")
    assert outcome.entity == "tb_counter"


def test_run_generate_applies_prefix_and_zoom_overrides(
    source_builder: SourceBuilder, tmp_path: Path
) -> None:
    source_builder.write({"tb.vhd": TB_COUNTER})
    output = tmp_path / "v.tcl"

    Orchestrator().run_generate(
        source_builder.path(), "tb_counter", output, signal_prefix="sim.", zoom_fit=True
    )

    lines = output.read_text(encoding="utf-8").splitlines()
    assert 'gtkwave::addSignalsFromList "sim.clk"' in lines
    assert lines[-1] == "gtkwave::/Time/Zoom/Zoom_Best_Fit"


def test_run_generate_reads_folder_config(source_builder: SourceBuilder, tmp_path: Path) -> None:
    source_builder.write(
        {
            ".wavegen.yml": 'signal_prefix: "tb.{entity}.u."\nvector_types: [std_logic]\n',
            "tb.vhd": TB_COUNTER,
        }
    )
    output = tmp_path / "v.tcl"

    Orchestrator().run_generate(source_builder.path(), "tb_counter", output)

    text = output.read_text(encoding="utf-8")
    assert '"tb.tb_counter.u.clk"' in text
    # clk is std_logic, now configured as a vector type
    assert text.count("gtkwave::/Edit/Data_Format/Binary") == 1


def test_run_generate_can_omit_decimal_format(source_builder: SourceBuilder, tmp_path: Path) -> None:
    source_builder.write({".wavegen.yml": "explicit_decimal: false\n", "tb.vhd": TB_COUNTER})
    output = tmp_path / "v.tcl"

    Orchestrator().run_generate(source_builder.path(), "tb_counter", output)

    text = output.read_text(encoding="utf-8")
    assert "Data_Format/Decimal" not in text
    assert text.count("gtkwave::/Edit/Data_Format/Binary") == 1


def test_run_generate_stops_at_first_matching_file(
    source_builder: SourceBuilder, tmp_path: Path
) -> None:
    source_builder.write(
        {
            "a/tb.vhd": """
                entity tb is end;
                architecture first of tb is
                    signal from_a : bit;
                begin
                end;
            """,
            "b/tb.vhd": """
                entity tb is end;
                architecture second of tb is
                    signal from_b : bit;
                begin
                end;
            """,
        }
    )
    output = tmp_path / "v.tcl"

    outcome = Orchestrator().run_generate(source_builder.path(), "tb", output)

    assert outcome.source.parent.name == "a"
    assert "from_a" in output.read_text(encoding="utf-8")


def test_run_generate_missing_entity(source_builder: SourceBuilder, tmp_path: Path) -> None:
    source_builder.write({"tb.vhd": TB_COUNTER})
    output = tmp_path / "v.tcl"
    with pytest.raises(EntityNotFound):
        Orchestrator().run_generate(source_builder.path(), "tb_missing", output)
    assert not output.exists()


def test_run_generate_entity_without_architecture(
    source_builder: SourceBuilder, tmp_path: Path
) -> None:
    source_builder.write({"tb.vhd": "entity tb is\nend entity;\n"})
    output = tmp_path / "v.tcl"
    with pytest.raises(MissingArchitecture):
        Orchestrator().run_generate(source_builder.path(), "tb", output)
    assert not output.exists()


def test_structural_error_aborts_run(source_builder: SourceBuilder, tmp_path: Path) -> None:
    source_builder.write({"a_broken.vhd": BROKEN, "tb.vhd": TB_COUNTER})
    with pytest.raises(ParseError):
        Orchestrator().run_generate(source_builder.path(), "tb_counter", tmp_path / "v.tcl")


def test_keep_going_skips_unparsable_files(
    source_builder: SourceBuilder, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    source_builder.write({"a_broken.vhd": BROKEN, "tb.vhd": TB_COUNTER})
    caplog.set_level("WARNING", logger="wavegen")

    outcome = Orchestrator().run_generate(
        source_builder.path(), "tb_counter", tmp_path / "v.tcl", keep_going=True
    )

    assert outcome.entity == "tb_counter"
    assert any("a_broken.vhd" in record.getMessage() for record in caplog.records)


def test_run_list_summarises_entities(source_builder: SourceBuilder) -> None:
    source_builder.write(
        {
            "tb.vhd": TB_COUNTER,
            "pkg/lonely.vhd": "entity lonely is end;",
        }
    )

    summaries = Orchestrator().run_list(source_builder.path())

    by_name = {summary.name: summary for summary in summaries}
    assert set(by_name) == {"tb_counter", "lonely"}
    assert by_name["tb_counter"].architecture == "sim"
    assert by_name["tb_counter"].signal_count == 3
    assert by_name["lonely"].architecture is None
    assert by_name["lonely"].signal_count == 0


def test_generate_script_requires_architecture() -> None:
    with pytest.raises(MissingArchitecture):
        generate_script(ParsedEntity(name="tb"))
