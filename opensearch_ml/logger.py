import logging

import requests

urllib3 = requests.packages.urllib3  # type: ignore # pylint: disable=no-member

logger = logging.getLogger(__name__)
logging.basicConfig()
logging.getLogger(urllib3.__package__).setLevel(logging.ERROR)


def quiet_insecure_request_warnings():
    """Drops urllib3's per-request warning once TLS verification is off."""
    urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
    logger.warning("TLS certificate verification is disabled")
