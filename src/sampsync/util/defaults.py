# -*- coding: utf-8 -*-

DEFAULT_SERVER_URL = "http://127.0.0.1:8000"
DEFAULT_DEVICE_KIND = "MONKEY"
DEFAULT_REQUEST_TIMEOUT = 5  # seconds
DEFAULT_POLL_INTERVAL = 0.1  # seconds, for wait_for_upload_to_finish
DEFAULT_LOGLEVEL = "INFO"
TEST_LOGLEVEL = "TRACE"

SLOT_COUNT = 10  # sample packs held by the device
DEFAULT_SAMPLE_PACK_IDS = ("W-MIXED", "W-UNDRGND", "W-OLLI", "W-OG")
