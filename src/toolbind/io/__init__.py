"""IO - JSON codec and request extras."""

from .codec import Codec, OrjsonCodec, decode, encode, encode_str, get_codec, pretty
from .extra import ExtraParameters

__all__ = ["Codec", "OrjsonCodec", "get_codec", "encode", "encode_str", "decode", "pretty", "ExtraParameters"]
