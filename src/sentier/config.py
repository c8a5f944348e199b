"""Router configuration.

RouterConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(decode_params=False)
    """

    # Percent-decode path parameters when they are captured
    decode_params: bool = True

    # Percent-encode path parameters when a URL is generated
    encode_params: bool = True

    # Reject boolean parameters outside true/false/1/0/yes/no/on/off
    strict_bool: bool = True
