"""Per-language detection tables.

Each entry maps a source pattern to a CycloneDX asset type and primitive.
A pattern either names the asset itself or captures it in the ``name`` group.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from cbom_scanner.models.language import Language


@dataclass(frozen=True)
class CryptoPattern:
    regex: re.Pattern[str]
    asset_type: str
    primitive: str
    name: str | None = None  # fixed name; None means use the ``name`` group
    uppercase: bool = False


def _p(
    pattern: str,
    asset_type: str,
    primitive: str,
    name: str | None = None,
    uppercase: bool = False,
) -> CryptoPattern:
    return CryptoPattern(re.compile(pattern), asset_type, primitive, name, uppercase)


# Primitive refinement for algorithm names pulled out of string literals
# (Cipher.getInstance("RSA/ECB/PKCS1Padding") is a pke, not a block cipher).
_PRIMITIVE_BY_PREFIX: list[tuple[str, str]] = [
    ("RSA", "pke"),
    ("ECIES", "pke"),
    ("CHACHA20-POLY1305", "ae"),
    ("CHACHA20", "stream-cipher"),
    ("RC4", "stream-cipher"),
    ("ARCFOUR", "stream-cipher"),
]


def refine_primitive(name: str, default: str) -> str:
    upper = name.upper()
    for prefix, primitive in _PRIMITIVE_BY_PREFIX:
        if upper.startswith(prefix):
            return primitive
    if default == "block-cipher" and ("/GCM" in upper or "/CCM" in upper):
        return "ae"
    return default


_STRING = r"\(\s*\"(?P<name>[^\"]+)\""

JAVA_PATTERNS: list[CryptoPattern] = [
    _p(r"\bCipher\.getInstance" + _STRING, "algorithm", "block-cipher"),
    _p(r"\bMessageDigest\.getInstance" + _STRING, "algorithm", "hash"),
    _p(r"\bMac\.getInstance" + _STRING, "algorithm", "mac"),
    _p(r"\bSignature\.getInstance" + _STRING, "algorithm", "signature"),
    _p(r"\bKeyAgreement\.getInstance" + _STRING, "algorithm", "key-agree"),
    _p(r"\bSecretKeyFactory\.getInstance" + _STRING, "algorithm", "kdf"),
    _p(r"\bSecureRandom\.getInstance" + _STRING, "algorithm", "drbg"),
    _p(r"\bKeyPairGenerator\.getInstance" + _STRING, "related-crypto-material", "private-key"),
    _p(r"\bKeyGenerator\.getInstance" + _STRING, "related-crypto-material", "secret-key"),
    _p(r"\bSSLContext\.getInstance" + _STRING, "protocol", "tls"),
]

PYTHON_PATTERNS: list[CryptoPattern] = [
    _p(r"\bhashlib\.(?P<name>md5|sha1|sha224|sha256|sha384|sha512|sha3_\d+|blake2[bs])\b",
       "algorithm", "hash", uppercase=True),
    _p(r"\bhashlib\.new\(\s*['\"](?P<name>[^'\"]+)['\"]", "algorithm", "hash", uppercase=True),
    _p(r"\bhmac\.new\(", "algorithm", "mac", name="HMAC"),
    _p(r"\bhashes\.(?P<name>MD5|SHA1|SHA224|SHA256|SHA384|SHA512|SHA3_\d+|BLAKE2[bs])\(",
       "algorithm", "hash"),
    _p(r"\balgorithms\.(?P<name>AES|TripleDES|Blowfish|CAST5|Camellia|SM4|IDEA|SEED)\(",
       "algorithm", "block-cipher", uppercase=True),
    _p(r"\balgorithms\.(?P<name>ARC4|ChaCha20)\(", "algorithm", "stream-cipher", uppercase=True),
    _p(r"\b(?P<name>AESGCM|AESCCM|AESSIV|AESOCB3|ChaCha20Poly1305)\(", "algorithm", "ae"),
    _p(r"\bFernet\(", "algorithm", "ae", name="Fernet"),
    _p(r"\b(?P<name>PBKDF2HMAC|Scrypt|HKDF|Argon2id)\(", "algorithm", "kdf"),
    _p(r"\b(?P<name>Ed25519|Ed448)PrivateKey\.generate\(", "algorithm", "signature"),
    _p(r"\b(?P<name>X25519|X448)PrivateKey\.generate\(", "algorithm", "key-agree"),
    _p(r"\brsa\.generate_private_key\(", "related-crypto-material", "private-key", name="RSA"),
    _p(r"\bec\.generate_private_key\(", "related-crypto-material", "private-key", name="EC"),
    _p(r"\bssl\.(?P<name>PROTOCOL_TLS\w*|PROTOCOL_SSLv\d+)\b", "protocol", "tls"),
    _p(r"\bssl\.create_default_context\(", "protocol", "tls", name="TLS"),
]

GO_PATTERNS: list[CryptoPattern] = [
    _p(r"\baes\.NewCipher\(", "algorithm", "block-cipher", name="AES"),
    _p(r"\bdes\.NewTripleDESCipher\(", "algorithm", "block-cipher", name="3DES"),
    _p(r"\bdes\.NewCipher\(", "algorithm", "block-cipher", name="DES"),
    _p(r"\brc4\.NewCipher\(", "algorithm", "stream-cipher", name="RC4"),
    _p(r"\bcipher\.NewGCM\w*\(", "algorithm", "ae", name="GCM"),
    _p(r"\bchacha20poly1305\.NewX?\(", "algorithm", "ae", name="ChaCha20-Poly1305"),
    _p(r"\b(?P<name>md5|sha1|sha256|sha512|sha3)\.(?:New|Sum)\w*\(", "algorithm", "hash",
       uppercase=True),
    _p(r"\bhmac\.New\(", "algorithm", "mac", name="HMAC"),
    _p(r"\brsa\.(?:SignPKCS1v15|SignPSS)\(", "algorithm", "signature", name="RSA"),
    _p(r"\brsa\.(?:EncryptOAEP|EncryptPKCS1v15)\(", "algorithm", "pke", name="RSA"),
    _p(r"\becdsa\.Sign\w*\(", "algorithm", "signature", name="ECDSA"),
    _p(r"\bed25519\.Sign\(", "algorithm", "signature", name="Ed25519"),
    _p(r"\becdh\.(?P<name>P256|P384|P521|X25519)\(\)", "algorithm", "key-agree"),
    _p(r"\brsa\.GenerateKey\(", "related-crypto-material", "private-key", name="RSA"),
    _p(r"\becdsa\.GenerateKey\(", "related-crypto-material", "private-key", name="ECDSA"),
    _p(r"\bed25519\.GenerateKey\(", "related-crypto-material", "private-key", name="Ed25519"),
    _p(r"\btls\.(?P<name>VersionTLS1[0-3]|VersionSSL30)\b", "protocol", "tls"),
]

PATTERNS_BY_LANGUAGE: dict[Language, list[CryptoPattern]] = {
    Language.JAVA: JAVA_PATTERNS,
    Language.PYTHON: PYTHON_PATTERNS,
    Language.GO: GO_PATTERNS,
}

# Line comment markers; matches on these lines are ignored
COMMENT_PREFIXES: dict[Language, tuple[str, ...]] = {
    Language.JAVA: ("//",),
    Language.PYTHON: ("#",),
    Language.GO: ("//",),
}

# (open, close) block comment markers; lines inside a block are ignored
BLOCK_COMMENTS: dict[Language, tuple[str, str]] = {
    Language.JAVA: ("/*", "*/"),
    Language.GO: ("/*", "*/"),
}
