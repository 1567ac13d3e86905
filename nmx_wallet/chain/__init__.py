"""Chain clients: REST queries, RPC broadcast and the signing handle."""
from .rest import QueryClient
from .rpc import RpcClient
from .signing import SigningClient

__all__ = ["QueryClient", "RpcClient", "SigningClient"]
