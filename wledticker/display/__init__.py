"""Display output: packet encoding, sinks and the frame pump."""

from wledticker.display.packet import DRGB_HEADER, drgb_header, encode
from wledticker.display.preview import PreviewSink
from wledticker.display.scroller import ScrollResult, Scroller
from wledticker.display.udp import UdpSink, resolve_host

__all__ = [
    "DRGB_HEADER",
    "PreviewSink",
    "ScrollResult",
    "Scroller",
    "UdpSink",
    "drgb_header",
    "encode",
    "resolve_host",
]
