"""PPE flow table: entries -> row descriptors -> <tr> elements."""

from dataclasses import dataclass

from .config import MAX_ROWS
from .dom import E
from .formatter import format_byte_size, format_packet_count
from .i18n import _
from .model import FlowState

SEVERITY = {
    FlowState.BOUND:   "success",
    FlowState.UNBOUND: "warning",
    FlowState.OTHER:   "default",
}

COLUMN_TITLES = (
    "Index",
    "State",
    "Type",
    "Original Flow",
    "New Flow",
    "Ethernet",
    "Packets",
    "Bytes",
)

EMPTY = "-"


@dataclass(frozen=True)
class RowView:
    index: str = EMPTY
    state_label: str = EMPTY
    severity: str = "default"
    type: str = EMPTY
    original_flow: str = EMPTY
    new_flow: str = EMPTY
    ethernet: str = EMPTY
    packets: str = "0"
    bytes: str = "0 B"
    placeholder: bool = False
    message: str = ""


def columns(translate=_):
    return [translate(t) for t in COLUMN_TITLES]


def render_rows(entries, limit=MAX_ROWS, translate=_):
    """Project flow entries onto at most ``limit`` rows, in original order."""
    if not entries:
        return [RowView(placeholder=True, message=translate("No PPE flow entries available"))]

    return [
        RowView(
            index=e.index or EMPTY,
            state_label=e.state_tag or EMPTY,
            severity=SEVERITY[e.state],
            type=e.type or EMPTY,
            original_flow=e.original_flow or EMPTY,
            new_flow=e.new_flow or EMPTY,
            ethernet=e.ethernet_pair or EMPTY,
            packets=format_packet_count(e.packets),
            bytes=format_byte_size(e.bytes),
        )
        for e in entries[:limit]
    ]


def row_element(row):
    if row.placeholder:
        return E("tr", {"class": "tr placeholder"}, [
            E("td", {"class": "td", "colspan": len(COLUMN_TITLES), "style": "text-align:center;"},
              row.message),
        ])
    return E("tr", {"class": "tr"}, [
        E("td", {"class": "td"}, row.index),
        E("td", {"class": "td"}, E("span", {"class": f"label label-{row.severity}"}, row.state_label)),
        E("td", {"class": "td"}, row.type),
        E("td", {"class": "td"}, row.original_flow),
        E("td", {"class": "td"}, row.new_flow),
        E("td", {"class": "td"}, row.ethernet),
        E("td", {"class": "td"}, row.packets),
        E("td", {"class": "td"}, row.bytes),
    ])


def row_elements(rows):
    return [row_element(r) for r in rows]
