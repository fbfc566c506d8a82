"""Read-only status dashboard for the Airoha NPU (ubus ``luci.airoha_npu``)."""

from .formatter import format_byte_size, format_packet_count, format_total_memory
from .model import FlowEntry, FlowState, StatusView, ViewModel, build_view_model
from .panel import Surface, apply_update, render_initial
from .rpc import UbusClient, UbusError
from .sync import SyncEngine
from .table import RowView, render_rows

__version__ = "1.0.0"
