from envier import validators

from callspy.settings._core import SpyConfigBase


class CallspyConfig(SpyConfigBase):
    __prefix__ = "callspy"

    debug = SpyConfigBase.v(
        bool,
        "debug",
        default=False,
        help_type="Boolean",
        help="Set the callspy logger level to DEBUG",
    )

    log_stream_handler = SpyConfigBase.v(
        bool,
        "log_stream_handler",
        default=True,
        help_type="Boolean",
        help="Attach a stream handler to the callspy logger",
    )

    logging_rate = SpyConfigBase.v(
        int,
        "logging_rate",
        default=60,
        help_type="Integer",
        help="Minimum number of seconds between two records logged from the same line. 0 disables rate limiting",
    )

    alias_suffix_bytes = SpyConfigBase.v(
        int,
        "alias_suffix_bytes",
        default=8,
        help_type="Integer",
        help="Number of random bytes used to build the names that hold original implementations",
        validator=validators.range(1, 64),
    )

    spy_dunders = SpyConfigBase.v(
        bool,
        "spy_dunders",
        default=False,
        help_type="Boolean",
        help="Include dunder members that are not defined by the root type when spying on every member",
    )


config = CallspyConfig()
