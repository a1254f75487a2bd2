__version__ = '0.1.0'
__author__ = 'The ndnkeychain developers'
__contact__ = ''
__url__ = ''
__license__ = 'LGPLv3'
__copyright__ = 'Copyright 2026 The ndnkeychain developers'
