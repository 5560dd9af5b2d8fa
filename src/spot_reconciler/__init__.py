"""Spot Reconciler - Root Package.

This package keeps the local record of outstanding EC2 spot instance requests
in step with what AWS reports for them, region by region.

Key Components:
    - domain: Spot request records, the status classifier and the ports
    - application: The reconciliation pass (batching, region reconciler, fanout)
    - infrastructure: AWS adapter and state store implementations
    - config: Configuration schemas and manager
    - cli: Command line entry point
"""

from ._version import __version__

__all__ = ["__version__"]
