"""xgraph - X/Twitter social-graph client."""

from xgraph.models.profile import Profile
from xgraph.models.page import Page
from xgraph.config import ClientConfig
from xgraph.core.client import GraphClient
from xgraph.core.decoder import decode_timeline
from xgraph.core.exporter import to_json, to_dict, save_json, load_json

__version__ = "0.1.0"

__all__ = [
    # Main interface
    "GraphClient",
    "ClientConfig",
    "decode_timeline",
    # Models
    "Profile",
    "Page",
    # Export utilities
    "to_json",
    "to_dict",
    "save_json",
    "load_json",
    "__version__",
]
