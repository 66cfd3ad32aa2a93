from ..app.config import Config
from ..schemas.ledger_models import User
from ..utils.logger import get_logger

logger = get_logger()


def seed_demo_user(ledger, config=Config) -> User:
    """Make sure the demo user the front end talks as exists."""
    user = ledger.ensure_user(User(
        id=config.DEFAULT_USER_ID,
        username=config.DEFAULT_USERNAME,
        password=config.DEFAULT_PASSWORD,
    ))
    logger.info("Demo user ready: %s (%s)", user.username, user.id)
    return user
