"""Plotly Dash dashboard: loan form, schedule table, balance chart.

Run with: python -m amortization.dashboard.app
"""

from datetime import date
from decimal import Decimal

import plotly.graph_objects as go
from dash import Dash, Input, Output, State, callback, dash_table, dcc, html, no_update
from dash.dash_table import FormatTemplate

from amortization.config import settings
from amortization.engine.errors import ScheduleError
from amortization.engine.export import export_filename, schedule_to_xlsx
from amortization.engine.limits import enforce_request_limits
from amortization.engine.schedule import compute_schedule
from amortization.engine.table import TableRow, column_header, decorate
from amortization.models.schedule import ScheduleRequest, TermType

BTN_STYLE = {
    "padding": "0.75rem 2rem",
    "fontSize": "1rem",
    "backgroundColor": "#1a1a2e",
    "color": "white",
    "border": "none",
    "cursor": "pointer",
}

FIELD_STYLE = {"width": "100%", "padding": "0.5rem", "fontSize": "0.95rem"}

MONEY_COLUMNS = [
    ("beginning_balance", "Beginning Balance"),
    ("payment", "Payment"),
    ("interest", "Interest"),
    ("total_interest_paid", "Total Interest Paid"),
    ("principal", "Principal"),
    ("ending_balance", "Ending Balance"),
]


def _field(label, component):
    return html.Div([
        html.Label(label, style={"fontSize": "0.85rem", "marginBottom": "0.25rem", "display": "block"}),
        component,
    ], style={"flex": "1", "minWidth": "140px"})


def _decimal_or_none(value) -> Decimal | None:
    return None if value in (None, "") else Decimal(str(value))


def _columns(header: str) -> list[dict]:
    return [{"name": header, "id": "label"}] + [
        {"name": name, "id": key, "type": "numeric", "format": FormatTemplate.money(2)}
        for key, name in MONEY_COLUMNS
    ]


def _rows_to_records(rows: list[TableRow]) -> list[dict]:
    records = []
    for r in rows:
        record = {"period": r.period, "label": r.label}
        for key, _ in MONEY_COLUMNS:
            record[key] = float(getattr(r, key))
        records.append(record)
    return records


def _balance_figure(rows: list[TableRow]) -> go.Figure:
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=[r.period for r in rows],
        y=[float(r.ending_balance) for r in rows],
        name="Ending Balance",
        mode="lines",
    ))
    fig.add_trace(go.Scatter(
        x=[r.period for r in rows],
        y=[float(r.total_interest_paid) for r in rows],
        name="Total Interest Paid",
        mode="lines",
    ))
    fig.update_layout(
        xaxis_title="Period",
        yaxis_title="$",
        margin={"t": 30, "b": 40},
        legend={"orientation": "h"},
    )
    return fig


def schedule_view(price, down, rate, term, payment, term_type, start_date=None) -> dict:
    """Compute everything the page shows. Returns {"error": msg} on rejection."""
    start = date.fromisoformat(start_date) if isinstance(start_date, str) else start_date
    if price is None or rate is None:
        return {"error": "Purchase Price and Interest Rate are required."}

    request = ScheduleRequest(
        purchase_price=Decimal(str(price)),
        down_payment=_decimal_or_none(down) or Decimal("0"),
        annual_interest_percent=Decimal(str(rate)),
        term_type=term_type or TermType.MONTH.value,
        term_periods=int(term) if term not in (None, "") else None,
        periodic_payment=_decimal_or_none(payment),
        loan_start_date=start,
    )
    try:
        enforce_request_limits(
            request,
            max_years=settings.max_years,
            max_interest_percent=settings.max_interest_percent,
        )
        schedule = compute_schedule(request, max_periods=settings.max_schedule_periods)
    except ScheduleError as e:
        return {"error": str(e)}

    rows = decorate(schedule, start)
    return {
        "error": None,
        "schedule": schedule,
        "rows": rows,
        "records": _rows_to_records(rows),
        "header": column_header(schedule.term_type, start),
        "figure": _balance_figure(rows),
    }


app = Dash(__name__, title="Amortization Table")

app.layout = html.Div([
    html.Nav([
        html.H1("Amortization Table", style={"fontSize": "1.5rem", "margin": "0 auto", "maxWidth": "1200px"}),
    ], style={
        "backgroundColor": "#1a1a2e",
        "color": "white",
        "padding": "1rem",
        "marginBottom": "2rem",
    }),

    html.Div([
        html.Div([
            _field("Purchase Price ($)", dcc.Input(id="price", type="number", placeholder="250000", style=FIELD_STYLE)),
            _field("Down Payment ($)", dcc.Input(id="down", type="number", placeholder="50000", style=FIELD_STYLE)),
            _field("Interest Rate (%)", dcc.Input(id="rate", type="number", step=0.01, placeholder="6", style=FIELD_STYLE)),
            _field("Term Type", dcc.Dropdown(
                id="term-type",
                options=[{"label": t.value, "value": t.value} for t in TermType],
                value=TermType.MONTH.value,
                clearable=False,
            )),
        ], style={"display": "flex", "gap": "1rem", "marginBottom": "0.75rem"}),
        html.Div([
            _field("Term (periods)", dcc.Input(id="term", type="number", placeholder="360", style=FIELD_STYLE)),
            _field("Payment ($ per period)", dcc.Input(id="payment", type="number", placeholder="or payment", style=FIELD_STYLE)),
            _field("Loan Start Date", dcc.DatePickerSingle(id="start-date")),
            html.Div([
                html.Label(" ", style={"fontSize": "0.85rem", "display": "block"}),
                html.Button("Calculate", id="calc-btn", n_clicks=0, style=BTN_STYLE),
            ], style={"flex": "0 0 auto"}),
        ], style={"display": "flex", "gap": "1rem", "alignItems": "end"}),

        html.Div(id="error", style={"color": "#e94560", "margin": "1rem 0"}),
        html.Div(id="summary", style={"marginBottom": "1rem"}),
        dcc.Graph(id="balance-chart"),

        html.Button("Download Excel", id="download-btn", n_clicks=0, style=BTN_STYLE),
        dcc.Download(id="download"),

        dash_table.DataTable(
            id="schedule-table",
            columns=_columns("Period"),
            data=[],
            filter_action="native",
            sort_action="native",
            page_size=24,
            style_table={"overflowX": "auto", "marginTop": "1rem"},
        ),
    ], style={"maxWidth": "1200px", "margin": "0 auto", "padding": "0 1rem"}),
])


_INPUTS = [
    State("price", "value"),
    State("down", "value"),
    State("rate", "value"),
    State("term", "value"),
    State("payment", "value"),
    State("term-type", "value"),
    State("start-date", "date"),
]


@callback(
    Output("schedule-table", "data"),
    Output("schedule-table", "columns"),
    Output("balance-chart", "figure"),
    Output("summary", "children"),
    Output("error", "children"),
    Input("calc-btn", "n_clicks"),
    *_INPUTS,
    prevent_initial_call=True,
)
def update_schedule(n_clicks, price, down, rate, term, payment, term_type, start_date):
    view = schedule_view(price, down, rate, term, payment, term_type, start_date)
    if view["error"]:
        return [], no_update, go.Figure(), "", view["error"]

    schedule = view["schedule"]
    columns = _columns(view["header"])
    summary = html.Div([
        html.Strong(f"Payment: ${float(schedule.periodic_payment):,.2f}"),
        html.Span(f"  |  Periods: {len(schedule)}"),
        html.Span(f"  |  Total Interest: ${float(schedule.total_interest):,.2f}"),
        html.Span(f"  |  Total Paid: ${float(schedule.total_paid):,.2f}"),
    ])
    return view["records"], columns, view["figure"], summary, ""


@callback(
    Output("download", "data"),
    Input("download-btn", "n_clicks"),
    *_INPUTS,
    prevent_initial_call=True,
)
def download_schedule(n_clicks, price, down, rate, term, payment, term_type, start_date):
    view = schedule_view(price, down, rate, term, payment, term_type, start_date)
    if view["error"]:
        return no_update
    schedule = view["schedule"]
    start = date.fromisoformat(start_date) if start_date else None
    content = schedule_to_xlsx(view["rows"], schedule.term_type, start)
    return dcc.send_bytes(content, export_filename(schedule.term_type))


if __name__ == "__main__":
    app.run(debug=settings.debug, port=8050)
