import hashlib, logging
from Crypto.Cipher import AES
from Crypto.Util.Padding import pad, unpad
from django.core.exceptions import ImproperlyConfigured

from .exceptions import DecodeError

logger = logging.getLogger(__name__)

# CCAvenue mandates a zero IV for every transaction; changing it breaks
# interoperability with the gateway.
GATEWAY_IV = b"\0" * 16


class GatewayCodec:
    """AES-128-CBC codec for the encRequest / encResponse payloads.

    The key is the MD5 digest of the merchant working key. Ciphertext is
    exchanged as hex.
    """

    def __init__(self, working_key: str):
        if not working_key:
            logger.error("CCAvenue WORKING_KEY missing in settings")
            raise ImproperlyConfigured("CCAVENUE['WORKING_KEY'] setting is required to encrypt payments")
        self._key = hashlib.md5(working_key.encode()).digest()

    def _cipher(self):
        return AES.new(self._key, AES.MODE_CBC, iv=GATEWAY_IV)

    def encode(self, plain: str) -> str:
        enc = self._cipher().encrypt(pad(plain.encode("utf-8"), AES.block_size))
        return enc.hex()

    def decode(self, cipher_text: str) -> str:
        try:
            data = bytes.fromhex((cipher_text or "").strip())
        except ValueError:
            raise DecodeError("Encrypted payload is not valid hex") from None
        if not data or len(data) % AES.block_size:
            raise DecodeError("Encrypted payload length is not a multiple of the block size")
        try:
            plain = unpad(self._cipher().decrypt(data), AES.block_size)
        except ValueError:
            raise DecodeError("Encrypted payload failed padding check") from None
        try:
            return plain.decode("utf-8")
        except UnicodeDecodeError:
            raise DecodeError("Decrypted payload is not valid text") from None
