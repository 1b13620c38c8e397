"""Pytest configuration and fixtures for sfcto tests."""

import sys
from pathlib import Path

import pytest

# Add src directory to Python path
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


LINE3_SFC = """ISO-10303-21;
HEADER;
FILE_DESCRIPTION(('SCADEC level2 feature_mode'),
        '2;1');
FILE_NAME('LINE3.sfc',
        '2025-8-14T15:16:47',
        ('author'),
        ('office'),
        'SCADEC_API_Ver3.30$$3.0',
        'TREND-ONE Ver.7',
        '');
FILE_SCHEMA(('ASSOCIATIVE_DRAUGHTING'));
ENDSEC;
DATA;

/*SXF
#100 = drawing_sheet_feature('LINE3','9','1','420','297')
SXF*/

/*SXF
#110 = user_defined_colour_feature('255','0','0')
SXF*/

/*SXF
#120 = sfig_org_feature('$$ATRU$$1$$背景色$$色$$255_255_255','3')
SXF*/

/*SXF
#130 = line_feature('2','3','2','2','0.000000','10.000000','0.000000','0.000000')
SXF*/

/*SXF
#140 = sfig_org_feature('もうひとつの用紙系','2')
SXF*/

/*SXF
#150 = line_feature('2','5','2','2','100.000000','200.000000','0.000000','50.000000')
SXF*/

/*SXF
#160 = polyline_feature('1','17','1','1','3',(0.0,10.0,20.0),(0.0,5.0,0.0))
SXF*/

/*SXF
#180 = sfig_org_feature('傾きあり','2')
SXF*/

/*SXF
#190 = arc_feature('1','1','1','5','5.000000','5.000000','2.500000','1','0.0','90.0')
SXF*/

/*SXF
#200 = line_feature('1','1','1','5','abc','1.0','2.0','3.0')
SXF*/

/*SXF
#210 = text_string_feature('1','1','1','テキスト','1.000000','2.000000','3.5','3.0','0.0','0.0','0.0','1','1')
SXF*/

/*SXF
#240 = sfig_locate_feature('0','傾きあり','100.000000','200.000000','90.0','1.0','1.0')
SXF*/

/*SXF
#250 = sfig_locate_feature('0','もうひとつの用紙系','10.000000','20.000000','0.0','2.0','2.0')
SXF*/

/*SXF
#260 = line_feature('1','1','1','1','1.0','2.0','3.0','4.0')
SXF*/

ENDSEC;
END-ISO-10303-21;
"""


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def line3_content():
    """Return the content of a small SFC file with three levels."""
    return LINE3_SFC


@pytest.fixture
def line3_file(tmp_path):
    """Write the sample SFC file Shift-JIS encoded and return its path."""
    sfc_path = tmp_path / "LINE3.sfc"
    sfc_path.write_bytes(LINE3_SFC.encode("cp932"))
    return sfc_path


def make_sfc(*records: str) -> str:
    """Build an SFC buffer from record strings without the leading ``#id =``."""
    lines = ["ISO-10303-21;", "HEADER;", "FILE_SCHEMA(('ASSOCIATIVE_DRAUGHTING'));", "ENDSEC;", "DATA;"]
    for idx, record in enumerate(records, start=1):
        lines.append("/*SXF")
        lines.append(f"#{idx * 10} = {record}")
        lines.append("SXF*/")
    lines.extend(["ENDSEC;", "END-ISO-10303-21;"])
    return "\n".join(lines)


@pytest.fixture
def sfc_builder():
    """Return the helper building SFC buffers from records."""
    return make_sfc
