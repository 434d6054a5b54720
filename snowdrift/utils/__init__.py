from snowdrift.utils.digest import url_digest
from snowdrift.utils.codec import ShortcodeCodec, generate_shortcode, decode_shortcode
from snowdrift.utils.helpers import get_short_url, guarantee_500_response
from snowdrift.utils.logging import initialize_logging


__all__ = [
    'url_digest',
    'ShortcodeCodec',
    'generate_shortcode',
    'decode_shortcode',
    'get_short_url',
    'guarantee_500_response',
    'initialize_logging',
]
