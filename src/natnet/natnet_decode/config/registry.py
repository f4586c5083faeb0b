from natnet_decode.config.schema import DecoderArgs

# ------------------------------------------------------------
# Motive releases and the NatNet stream version they send
# ------------------------------------------------------------


DecoderArgsRegistry: dict[str, DecoderArgs] = {}

DecoderArgsRegistry["motive_1_5"] = DecoderArgs(version="2.5.0")

DecoderArgsRegistry["motive_1_7"] = DecoderArgs(version="2.7.0")

DecoderArgsRegistry["motive_1_9"] = DecoderArgs(version="2.9.0")

DecoderArgsRegistry["motive_2_0"] = DecoderArgs(version="3.0.0")

DecoderArgsRegistry["motive_1_9_debug"] = DecoderArgs(
    version="2.9.0",
    log_level="DEBUG",
    log_format=["stdout"],
)
