import logging
import sys

from collab_primitives.core.config import Config
from collab_primitives.services.fixtures import random_text


def main(argv: list[str] | None = None) -> int:
    """Print fixture text seeded from configuration.

    An optional first argument overrides ``FIXTURE_LENGTH``.
    """
    args = sys.argv[1:] if argv is None else argv
    try:
        Config.validate()
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=Config.log_level(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(),
        ]
    )
    logger = logging.getLogger(__name__)

    length = Config.fixture_length()
    if args:
        try:
            length = int(args[0])
        except ValueError:
            logger.error(f"Invalid length argument: {args[0]!r}")
            return 2
        if length < 0:
            logger.error(f"Length must be non-negative, got {length}")
            return 2

    seed = Config.fixture_seed()
    text = random_text(seed, length)
    logger.info(f"Generated {len(text)} characters ({len(text.encode('utf-8'))} bytes) with seed {seed}")
    print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
