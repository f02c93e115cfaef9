"""Navigator Secrets Meta information.
   Navigator Secrets protects sensitive values at rest and keeps them out of logs.
"""
__title__ = 'navigator_secrets'
__description__ = (
   'Navigator Secrets provides AES-256-GCM encryption for stored values '
   'and redaction of secrets from log output.'
)
__version__ = '0.3.0'
__copyright__ = 'Copyright (c) 2024 Jesus Lara'
__author__ = 'Jesus Lara'
__author_email__ = 'jesuslarag@gmail.com'
__license__ = 'Apache-2.0'
__url__ = 'https://github.com/phenobarbital/navigator-secrets'
