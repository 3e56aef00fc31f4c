# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------

import pytest
import logging
from azure.iot.registry.models import Message

logging.basicConfig(level=logging.INFO)


@pytest.mark.describe("Message")
class TestMessage(object):

    data_str = "After all this time? Always"
    data_int = 987
    data_obj = Message(data_str)

    @pytest.mark.it("Instantiates from data type")
    @pytest.mark.parametrize(
        "data", [data_str, data_int, data_obj], ids=["String", "Integer", "Message"]
    )
    def test_instantiates_from_data(self, data):
        msg = Message(data)
        assert msg.data == data
        assert msg.get_data() is data

    @pytest.mark.it("Instantiates with empty properties and system properties")
    def test_defaults(self):
        msg = Message(self.data_str)
        assert msg.properties == {}
        assert msg.message_id == ""
        assert msg.to == ""
        assert msg.expiry_time_utc is None
        assert msg.lock_token == ""
        assert msg.correlation_id == ""
        assert msg.user_id == ""
        assert msg.ack is None

    @pytest.mark.it(
        "Uses string representation of data/payload attribute as string representation of Message"
    )
    @pytest.mark.parametrize(
        "data", [data_str, data_int, data_obj], ids=["String", "Integer", "Message"]
    )
    def test_str_rep(self, data):
        msg = Message(data)
        assert str(msg) == str(data)

    @pytest.mark.it("Returns the data as bytes from .get_bytes()")
    @pytest.mark.parametrize(
        "data, expected_bytes",
        [
            pytest.param(b"\x00\x01", b"\x00\x01", id="Bytes"),
            pytest.param("café", "café".encode("utf-8"), id="String"),
            pytest.param(bytearray(b"abc"), b"abc", id="Bytearray"),
            pytest.param([104, 105], b"hi", id="List of byte values"),
            pytest.param(987, b"987", id="Integer"),
        ],
    )
    def test_get_bytes(self, data, expected_bytes):
        assert Message(data).get_bytes() == expected_bytes
