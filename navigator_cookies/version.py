"""Navigator Cookies Meta information.
   Navigator Cookies reads and writes plain, signed and sealed HTTP cookies.
"""
__title__ = 'navigator_cookies'
__description__ = (
   'Navigator Cookies reads and writes plain, signed and sealed '
   '(iron) HTTP cookies.'
)
__version__ = '0.8.1'
__copyright__ = 'Copyright (c) 2023 Jesus Lara'
__author__ = 'Jesus Lara'
__author_email__ = 'jesuslarag@gmail.com'
__license__ = 'Apache-2.0'
__url__ = 'https://github.com/phenobarbital/navigator-cookies'
