"""Image codec: resize, JPEG compression, base64 transport."""

from crooked_finger.infrastructure.media.image_codec import ImageCodec, decode_image_list, encode_image_list

__all__ = ["ImageCodec", "decode_image_list", "encode_image_list"]
