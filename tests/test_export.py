"""Tests for SpreadsheetML export."""

import xml.etree.ElementTree as ET
from datetime import date

import pytest

from tolstack.export import (
    F_SIGN,
    HEADERS,
    SHEET_NAME,
    default_filename,
    generate_spreadsheet_xml,
    save_spreadsheet,
)
from tolstack.models import Dimension, DimensionType
from tolstack.scenarios import default_stack
from tolstack.stackup import compute_stackup

NS = "{urn:schemas-microsoft-com:office:spreadsheet}"


def _rows(xml_text):
    root = ET.fromstring(xml_text)
    return root.findall(f"{NS}Worksheet/{NS}Table/{NS}Row")


def _texts(row):
    return [c.findtext(f"{NS}Data") for c in row.findall(f"{NS}Cell")]


def _summary(xml_text):
    """Map summary label to (formula, cached value)."""
    out = {}
    for row in _rows(xml_text):
        cells = row.findall(f"{NS}Cell")
        if len(cells) >= 2 and cells[0].get(f"{NS}Index") == "2":
            value_cell = cells[1]
            out[cells[0].findtext(f"{NS}Data")] = (
                value_cell.get(f"{NS}Formula"),
                float(value_cell.findtext(f"{NS}Data")),
            )
    return out


class TestWorkbook:
    def setup_method(self):
        self.dims = default_stack().dimensions
        self.xml = generate_spreadsheet_xml(self.dims)

    def test_well_formed(self):
        root = ET.fromstring(self.xml)
        sheet = root.find(f"{NS}Worksheet")
        assert sheet.get(f"{NS}Name") == SHEET_NAME

    def test_header_row(self):
        assert _texts(_rows(self.xml)[0]) == HEADERS

    def test_row_count(self):
        # header, one row per dimension, two blanks, four summary rows
        assert len(_rows(self.xml)) == 1 + len(self.dims) + 2 + 4

    def test_data_row(self):
        texts = _texts(_rows(self.xml)[1])
        assert texts[:6] == ["Housing Cavity Depth", "Main enclosure depth",
                             "20.0", "0.2", "0.2", "INCREASING"]

    def test_formulas_survive_escaping(self):
        cells = _rows(self.xml)[2].findall(f"{NS}Cell")
        assert cells[6].get(f"{NS}Formula") == F_SIGN
        assert cells[6].findtext(f"{NS}Data") == "-1"
        assert '&quot;INCREASING&quot;' in self.xml

    def test_summary_formulas(self):
        summary = _summary(self.xml)
        assert summary["Calculated Nominal Gap:"][0] == "=SUM(R2C8:R5C8)"
        assert summary["Worst Case Max:"][0] == "=SUM(R2C9:R5C9)"
        assert summary["Worst Case Min:"][0] == "=SUM(R2C10:R5C10)"
        assert summary["RSS Range (3 Sigma):"][0] == "=SQRT(SUM(R2C11:R5C11))*3"

    def test_cached_values_match_engine(self):
        summary = _summary(self.xml)
        r = compute_stackup(self.dims)
        assert summary["Calculated Nominal Gap:"][1] == pytest.approx(r.nominal_gap)
        assert summary["Worst Case Max:"][1] == pytest.approx(r.worst_case_max)
        assert summary["Worst Case Min:"][1] == pytest.approx(r.worst_case_min)
        # the sheet's "3 sigma" figure is three times the RSS tolerance
        assert summary["RSS Range (3 Sigma):"][1] == pytest.approx(3 * r.rss_tolerance)

    def test_rss_note(self):
        rss_row = [r for r in _rows(self.xml) if "RSS Range (3 Sigma):" in _texts(r)][0]
        assert _texts(rss_row)[-1] == "(± value)"


class TestEscaping:
    def test_special_characters_round_trip(self):
        dims = [Dimension("Lid & <Seal>", 2.0, 0.1, 0.1, DimensionType.DECREASING,
                          description='"quoted" it\'s')]
        texts = _texts(_rows(generate_spreadsheet_xml(dims))[1])
        assert texts[0] == "Lid & <Seal>"
        assert texts[1] == '"quoted" it\'s'

    def test_empty_description(self):
        texts = _texts(_rows(generate_spreadsheet_xml([Dimension("A", 1.0, 0.1, 0.1)]))[1])
        assert texts[1] is None or texts[1] == ""


class TestEmptyChain:
    def test_empty_stack_still_valid(self):
        xml = generate_spreadsheet_xml([])
        assert len(_rows(xml)) == 1 + 2 + 4
        assert _summary(xml)["Calculated Nominal Gap:"][1] == 0.0


class TestSave:
    def test_default_filename(self):
        assert default_filename(date(2024, 1, 2)) == "ToleranceStack_2024-01-02.xml"

    def test_save(self, tmp_path):
        path = str(tmp_path / "stack.xml")
        assert save_spreadsheet(default_stack().dimensions, path) == path
        with open(path, encoding="utf-8") as f:
            assert len(_rows(f.read())) == 11
