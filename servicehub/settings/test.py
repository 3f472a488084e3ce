from .base import *

DEBUG = False

SECRET_KEY = 'test-secret-key'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

ALLOWED_HOSTS = ['testserver']

CCAVENUE = {
    "MERCHANT_ID": "45990",
    "ACCESS_CODE": "AVTEST00ACCESS",
    "WORKING_KEY": "test-working-key",
    "PAYMENT_URL": "https://secure.ccavenue.test/transaction/transaction.do?command=initiateTransaction",
    "CALLBACK_URL": "",
    "CANCEL_URL": "",
    "FRONTEND_URL": "https://shop.example",
    "CURRENCY": "AED",
    "LANGUAGE": "EN",
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']
