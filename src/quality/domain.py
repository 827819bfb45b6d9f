"""Domain initialization and configuration for the Quality bounded context.

Quality owns the Product Assessment Pipeline: the two-stage review (digital,
then physical sample) every seller product passes before it can be sold.
"""

from protean.domain import Domain

from quality.utils.logging import configure_logging, get_logger

configure_logging(level="INFO", log_dir="logs", log_file_prefix="marketgate")

logger = get_logger(__name__)

# Domain Composition Root
quality = Domain(name="quality")
