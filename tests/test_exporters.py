from fire_planner.core.schemas import SimulationInput
from fire_planner.utils.exporters import export_projection_csv, projection_frame
from fire_planner.utils.formatting import currency_symbol, fmt_currency, fmt_pct, normalize_currency
from fire_planner.utils.projection_engine import project


def _result(years=2):
    return project(SimulationInput(current_funds=1000.4, years=years, monthly_contribution=100.5))


def test_projection_frame_columns():
    df = projection_frame(_result())
    assert list(df.columns) == ["month", "label", "nominal", "real"]
    assert len(df) == 24
    assert df["label"].iloc[11] == "Y1"


def test_csv_header_and_rounding():
    name, blob = export_projection_csv(_result(), currency="USD")
    lines = blob.decode().strip().split("\n")
    assert name == "fire_projection.csv"
    assert lines[0] == "Month,Label,Nominal_USD,Real_USD"
    assert len(lines) == 25
    # 1000.4 + 100.5 at 0% -> 1100.9 -> 1101
    assert lines[1] == "1,,1101,1101"
    assert lines[12] == "12,Y1,2206,2206"


def test_csv_unknown_currency_falls_back():
    _, blob = export_projection_csv(_result(1), currency="JPY")
    assert blob.decode().startswith("Month,Label,Nominal_EUR,Real_EUR")


def test_fmt_currency():
    assert fmt_currency(1234567.5, "EUR") == "€1,234,568"
    assert fmt_currency(1500, "USD") == "$1,500"
    assert fmt_currency(-42.2, "GBP") == "-£42"
    assert fmt_currency(float("nan")) == "€0"
    assert fmt_currency(float("inf"), "USD") == "$0"


def test_currency_helpers():
    assert currency_symbol("gbp") == "£"
    assert normalize_currency(None) == "EUR"
    assert normalize_currency(" usd ") == "USD"
    assert fmt_pct(0.0048675505653430484) == "0.5%"
    assert fmt_pct(0.035) == "3.5%"
