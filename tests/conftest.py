from eth_utils import (
    setup_DEBUG2_logging,
)

#
#  Setup DEBUG2 level logging.
#
# This needs to be done before the other imports
setup_DEBUG2_logging()
