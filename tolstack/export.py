"""Spreadsheet export of a dimension chain.

Writes an Excel 2003 XML (SpreadsheetML) workbook. The derived columns
and the summary block are live R1C1 formulas, so the sheet recomputes
the stack when a value is edited in Excel. The arithmetic mirrors
``tolstack.stackup.compute_stackup`` and has to be kept in step with it.
Cached cell values are filled in from the same arithmetic so viewers
that do not recalculate still show the right numbers.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from tolstack.models import Dimension, DimensionType

SHEET_NAME = "Stackup Analysis"

HEADERS = [
    "Component Name", "Description", "Nominal", "Tol (+)", "Tol (-)", "Type",
    "Sign (Calc)", "Eff. Nominal", "WC Max Part", "WC Min Part", "Avg Tol Sq",
]

COLUMN_WIDTHS = [150, 150, 60, 60, 60, 80, 40, 80, 80, 80, 80]

# Per-row formulas, relative to the formula cell (columns G..K).
F_SIGN = f'=IF(RC[-1]="{DimensionType.INCREASING.value}",1,-1)'
F_EFF_NOMINAL = "=RC[-5]*RC[-1]"
F_WC_MAX = "=IF(RC[-2]=1, RC[-6]+RC[-5], -(RC[-6]-RC[-4]))"
F_WC_MIN = "=IF(RC[-3]=1, RC[-7]-RC[-5], -(RC[-7]+RC[-6]))"
F_AVG_TOL_SQ = "=((RC[-7]+RC[-6])/2)^2"

_STYLES = """<Styles>
   <Style ss:ID="Default" ss:Name="Normal">
    <Alignment ss:Vertical="Bottom"/>
    <Borders/>
    <Font ss:FontName="Calibri" x:Family="Swiss" ss:Size="11" ss:Color="#000000"/>
    <Interior/>
    <NumberFormat/>
    <Protection/>
   </Style>
   <Style ss:ID="sHeader">
    <Alignment ss:Horizontal="Center" ss:Vertical="Bottom"/>
    <Font ss:FontName="Calibri" x:Family="Swiss" ss:Size="11" ss:Color="#FFFFFF" ss:Bold="1"/>
    <Interior ss:Color="#4472C4" ss:Pattern="Solid"/>
   </Style>
   <Style ss:ID="sResultLabel">
    <Font ss:FontName="Calibri" x:Family="Swiss" ss:Size="11" ss:Color="#333333" ss:Bold="1"/>
    <Alignment ss:Horizontal="Right"/>
   </Style>
   <Style ss:ID="sResultValue">
    <Font ss:FontName="Calibri" x:Family="Swiss" ss:Size="11" ss:Color="#000000" ss:Bold="1"/>
    <NumberFormat ss:Format="0.000"/>
    <Borders>
     <Border ss:Position="Bottom" ss:LineStyle="Continuous" ss:Weight="1"/>
    </Borders>
   </Style>
   <Style ss:ID="sCalculated">
    <Font ss:Color="#666666"/>
    <Interior ss:Color="#F2F2F2" ss:Pattern="Solid"/>
   </Style>
  </Styles>"""


def default_filename(day: Optional[date] = None) -> str:
    """``ToleranceStack_YYYY-MM-DD.xml`` for the given (or current) day."""
    day = day or date.today()
    return f"ToleranceStack_{day.isoformat()}.xml"


def generate_spreadsheet_xml(dimensions: Sequence[Dimension]) -> str:
    """Render the dimension chain as a SpreadsheetML workbook string."""
    rows = ["<Row>"]
    for h in HEADERS:
        rows.append(f'    <Cell ss:StyleID="sHeader"><Data ss:Type="String">{_esc(h)}</Data></Cell>')
    rows.append("   </Row>")

    sum_eff = sum_max = sum_min = sum_sq = 0.0
    for d in dimensions:
        sign, eff, wc_max, wc_min, avg_sq = _row_values(d)
        sum_eff += eff
        sum_max += wc_max
        sum_min += wc_min
        sum_sq += avg_sq
        rows.append(f"""   <Row>
    <Cell><Data ss:Type="String">{_esc(d.name)}</Data></Cell>
    <Cell><Data ss:Type="String">{_esc(d.description)}</Data></Cell>
    <Cell><Data ss:Type="Number">{_num(d.nominal)}</Data></Cell>
    <Cell><Data ss:Type="Number">{_num(d.tolerance_plus)}</Data></Cell>
    <Cell><Data ss:Type="Number">{_num(d.tolerance_minus)}</Data></Cell>
    <Cell><Data ss:Type="String">{d.direction.value}</Data></Cell>
    {_formula_cell("sCalculated", F_SIGN, sign)}
    {_formula_cell("sCalculated", F_EFF_NOMINAL, eff)}
    {_formula_cell("sCalculated", F_WC_MAX, wc_max)}
    {_formula_cell("sCalculated", F_WC_MIN, wc_min)}
    {_formula_cell("sCalculated", F_AVG_TOL_SQ, avg_sq)}
   </Row>""")

    start_row = 2
    end_row = len(dimensions) + 1

    # two blank rows before the summary block
    rows.append("   <Row></Row><Row></Row>")
    rows.append(_summary_row("Calculated Nominal Gap:",
                             f"=SUM(R{start_row}C8:R{end_row}C8)", sum_eff))
    rows.append(_summary_row("Worst Case Max:",
                             f"=SUM(R{start_row}C9:R{end_row}C9)", sum_max))
    rows.append(_summary_row("Worst Case Min:",
                             f"=SUM(R{start_row}C10:R{end_row}C10)", sum_min))
    rows.append(_summary_row("RSS Range (3 Sigma):",
                             f"=SQRT(SUM(R{start_row}C11:R{end_row}C11))*3",
                             (sum_sq ** 0.5) * 3,
                             note="(± value)"))

    columns = "\n".join(f'   <Column ss:Width="{w}"/>' for w in COLUMN_WIDTHS)
    body = "\n".join(rows)

    return f"""<?xml version="1.0"?>
<?mso-application progid="Excel.Sheet"?>
<Workbook xmlns="urn:schemas-microsoft-com:office:spreadsheet"
 xmlns:o="urn:schemas-microsoft-com:office:office"
 xmlns:x="urn:schemas-microsoft-com:office:excel"
 xmlns:ss="urn:schemas-microsoft-com:office:spreadsheet">
 {_STYLES}
 <Worksheet ss:Name="{SHEET_NAME}">
  <Table ss:ExpandedColumnCount="20" ss:ExpandedRowCount="{len(dimensions) + 50}" x:FullColumns="1" x:FullRows="1">
{columns}
   {body}
  </Table>
 </Worksheet>
</Workbook>"""


def save_spreadsheet(dimensions: Sequence[Dimension], path: Optional[str] = None) -> str:
    """Write the workbook to ``path`` (default: dated file name). Returns the path."""
    path = path or default_filename()
    with open(path, "w", encoding="utf-8") as f:
        f.write(generate_spreadsheet_xml(dimensions))
    return path


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------

def _row_values(d: Dimension) -> tuple[int, float, float, float, float]:
    """Cached values of the formula columns for one dimension."""
    sign = 1 if d.direction is DimensionType.INCREASING else -1
    if sign == 1:
        wc_max = d.nominal + d.tolerance_plus
        wc_min = d.nominal - d.tolerance_minus
    else:
        wc_max = -(d.nominal - d.tolerance_minus)
        wc_min = -(d.nominal + d.tolerance_plus)
    avg_sq = ((d.tolerance_plus + d.tolerance_minus) / 2) ** 2
    return sign, d.nominal * sign, wc_max, wc_min, avg_sq


def _formula_cell(style: str, formula: str, value: float) -> str:
    return (f'<Cell ss:StyleID="{style}" ss:Formula="{_esc(formula)}">'
            f'<Data ss:Type="Number">{_num(value)}</Data></Cell>')


def _summary_row(label: str, formula: str, value: float, note: str = "") -> str:
    extra = f'\n    <Cell><Data ss:Type="String">{_esc(note)}</Data></Cell>' if note else ""
    return f"""   <Row>
    <Cell ss:StyleID="sResultLabel" ss:Index="2"><Data ss:Type="String">{_esc(label)}</Data></Cell>
    {_formula_cell("sResultValue", formula, value)}{extra}
   </Row>"""


def _num(value: float) -> str:
    return repr(float(value)) if not isinstance(value, int) else str(value)


def _esc(text: Optional[str]) -> str:
    """Escape XML special characters."""
    if not text:
        return ""
    return (text
            .replace("&", "&amp;")
            .replace("<", "&lt;")
            .replace(">", "&gt;")
            .replace('"', "&quot;")
            .replace("'", "&apos;"))
