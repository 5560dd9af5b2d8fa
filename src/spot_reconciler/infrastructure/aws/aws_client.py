import logging
import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from typing import Optional

from spot_reconciler.config.schemas.aws_schema import AWSProviderConfig
from spot_reconciler.infrastructure.exceptions import CredentialsError

logger = logging.getLogger(__name__)

class AWSClient:
    """
    Per-region AWS client holder.

    Retries for throttling and transient errors are left to botocore's
    standard retry mode, configured from AWSProviderConfig.
    """

    def __init__(self, region_name: str, config: Optional[AWSProviderConfig] = None):
        """
        Initialize AWS clients for a region.

        Args:
            region_name: AWS region name
            config: Optional provider configuration

        Raises:
            CredentialsError: If credential validation is enabled and fails
        """
        config = config or AWSProviderConfig()
        self.region_name = region_name
        self.config = Config(
            region_name=region_name,
            retries={
                'max_attempts': config.max_retry_attempts,
                'mode': 'standard'
            },
            connect_timeout=config.connect_timeout_ms / 1000,
            read_timeout=config.read_timeout_ms / 1000,
        )

        self.session = boto3.Session(profile_name=config.profile, region_name=region_name)

        if config.validate_credentials:
            try:
                sts = self.session.client('sts', config=self.config, endpoint_url=config.endpoint_url)
                sts.get_caller_identity()
            except (BotoCoreError, ClientError) as e:
                logger.error(f"Failed to validate AWS credentials in {region_name}: {str(e)}")
                raise CredentialsError(f"Failed to validate AWS credentials: {str(e)}")

        self.ec2_client = self.session.client('ec2', config=self.config, endpoint_url=config.endpoint_url)
