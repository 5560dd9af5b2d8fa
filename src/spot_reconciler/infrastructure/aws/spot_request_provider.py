"""EC2 implementation of the spot request provider port."""
import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Sequence

from botocore.exceptions import BotoCoreError, ClientError

from spot_reconciler.config.schemas.aws_schema import AWSProviderConfig
from spot_reconciler.domain.base.ports import SpotRequestProviderPort
from spot_reconciler.domain.spot_request.exceptions import ProviderCallFailure
from spot_reconciler.domain.spot_request.value_objects import SpotRequestObservation
from spot_reconciler.infrastructure.aws.aws_client import AWSClient

logger = logging.getLogger(__name__)


class EC2SpotRequestProvider(SpotRequestProviderPort):
    """
    Describes and cancels EC2 spot instance requests.

    One AWSClient is created lazily per region and reused; creation is
    guarded by a lock so concurrent region passes share a single client.
    """

    def __init__(self,
                 config: Optional[AWSProviderConfig] = None,
                 client_factory: Optional[Callable[[str], AWSClient]] = None):
        """
        Args:
            config: AWS provider configuration
            client_factory: Builds an AWSClient for a region; defaults to AWSClient(region, config)
        """
        self._config = config or AWSProviderConfig()
        self._client_factory = client_factory or (lambda region: AWSClient(region, self._config))
        self._clients: Dict[str, AWSClient] = {}
        self._lock = threading.Lock()

    def _ec2(self, region: str):
        with self._lock:
            client = self._clients.get(region)
            if client is None:
                logger.debug("Creating EC2 client for region %s", region)
                client = self._client_factory(region)
                self._clients[region] = client
        return client.ec2_client

    def describe_requests(self, region: str, request_ids: Sequence[str]) -> List[SpotRequestObservation]:
        if not request_ids:
            return []
        response = self._call(
            region,
            "describe_spot_instance_requests",
            SpotInstanceRequestIds=list(request_ids),
        )
        observations = [
            self._to_observation(item) for item in response.get("SpotInstanceRequests", [])
        ]
        logger.debug("Described %s spot requests in %s", len(observations), region)
        return observations

    def cancel_requests(self, region: str, request_ids: Sequence[str]) -> List[str]:
        if not request_ids:
            return []
        response = self._call(
            region,
            "cancel_spot_instance_requests",
            SpotInstanceRequestIds=list(request_ids),
        )
        cancelled = [
            item["SpotInstanceRequestId"]
            for item in response.get("CancelledSpotInstanceRequests", [])
            if item.get("SpotInstanceRequestId")
        ]
        logger.debug("Cancelled %s of %s spot requests in %s", len(cancelled), len(request_ids), region)
        return cancelled

    def _call(self, region: str, operation: str, **kwargs) -> Dict[str, Any]:
        """Invoke an EC2 operation, converting boto errors to ProviderCallFailure."""
        try:
            return getattr(self._ec2(region), operation)(**kwargs)
        except ClientError as e:
            error = e.response.get("Error", {})
            logger.error("%s failed in %s: %s", operation, region, str(e))
            raise ProviderCallFailure(
                operation,
                region,
                error.get("Message", str(e)),
                error_code=error.get("Code"),
            ) from e
        except BotoCoreError as e:
            logger.error("%s failed in %s: %s", operation, region, str(e))
            raise ProviderCallFailure(operation, region, str(e)) from e

    @staticmethod
    def _to_observation(item: Dict[str, Any]) -> SpotRequestObservation:
        return SpotRequestObservation(
            request_id=item["SpotInstanceRequestId"],
            state=item.get("State"),
            status_code=(item.get("Status") or {}).get("Code"),
        )
