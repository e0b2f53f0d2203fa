"""
Configuration settings for the locale amount service.
"""

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# ========================================
# SERVER CONFIGURATION
# ========================================
HOST = os.getenv('LOCALE_AMOUNT_HOST', '0.0.0.0')
PORT = int(os.getenv('LOCALE_AMOUNT_PORT', '8003'))

# ========================================
# FORMATTING CONFIGURATION
# ========================================
# Used when a request carries neither `lang` nor Accept-Language.
DEFAULT_LANGUAGE = os.getenv('DEFAULT_LANGUAGE', '')

# ========================================
# APPLICATION CONFIGURATION
# ========================================
DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
