import logging
import os


class Config:
    ENV = os.environ.get('FLASHKA_ENV', 'development')
    # Static site root: index page, admin.html, card images, ad packs
    PUBLIC_DIR = os.environ.get('FLASHKA_PUBLIC_DIR') or os.path.join(os.getcwd(), 'public')
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3000'))
    ALLOWED_ORIGINS = os.environ.get('ALLOWED_ORIGINS', '*').split(',')
    # Number of image_<n>.png files rotated by /shuffle-images
    SHUFFLE_IMAGE_COUNT = int(os.environ.get('FLASHKA_SHUFFLE_IMAGE_COUNT', '10'))
    AD_TIMEZONE = os.environ.get('FLASHKA_AD_TIMEZONE', 'Australia/Brisbane')

    # Console game
    VARIANT = os.environ.get('FLASHKA_VARIANT', 'classic')
    STORE_PATH = os.environ.get('FLASHKA_STORE_PATH') or os.path.join(
        os.path.expanduser('~'), '.flashka', 'device.json'
    )
    # Empty disables outbound tracking
    TRACK_URL = os.environ.get('FLASHKA_TRACK_URL', '')
    TRACK_TIMEOUT_SEC = float(os.environ.get('FLASHKA_TRACK_TIMEOUT_SEC', '3'))
    SMS_TO = os.environ.get('FLASHKA_SMS_TO') or None

    LOG_LEVEL = os.environ.get('FLASHKA_LOG_LEVEL', 'INFO')


def configure_logging(level=None):
    logging.basicConfig(
        level=(level or Config.LOG_LEVEL).upper(),
        format='%(asctime)s - %(levelname)s - [%(name)s] - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )
