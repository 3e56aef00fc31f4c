# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------

import pytest
import logging
import time
from azure.iot.registry.connection_string import ConnectionString

logging.basicConfig(level=logging.DEBUG)

fake_connection_string = (
    "HostName=my.host.name;SharedAccessKeyName=mykeyname;SharedAccessKey=Zm9vYmFy"
)


@pytest.mark.describe("ConnectionString")
class TestConnectionString(object):
    @pytest.mark.it("Instantiates from a valid connection string")
    @pytest.mark.parametrize(
        "input_string",
        [
            pytest.param(fake_connection_string, id="Shared Access Key + Name"),
            pytest.param(
                "HostName=my.host.name;SharedAccessSignature=SharedAccessSignature sr=my.host.name&sig=s&se=1",
                id="Shared Access Signature",
            ),
        ],
    )
    def test_instantiates_correctly_from_string(self, input_string):
        cs = ConnectionString(input_string)
        assert isinstance(cs, ConnectionString)

    @pytest.mark.it("Raises ValueError on invalid string input during instantiation")
    @pytest.mark.parametrize(
        "input_string",
        [
            pytest.param("", id="Empty string"),
            pytest.param("garbage", id="Not a connection string"),
            pytest.param(
                "HostName=my.host.name;SharedAccessKey=Zm9vYmFy",
                id="Incomplete connection string (missing key name)",
            ),
            pytest.param(
                "SharedAccessKeyName=mykeyname;SharedAccessKey=Zm9vYmFy",
                id="Incomplete connection string (missing endpoint)",
            ),
            pytest.param("HostName=my.host.name", id="Incomplete connection string (missing auth)"),
            pytest.param(
                "InvalidKey=my.host.name;SharedAccessKeyName=mykeyname;SharedAccessKey=Zm9vYmFy",
                id="Invalid key",
            ),
            pytest.param(
                "HostName=my.host.name;HostName=my.host.name;SharedAccessKeyName=mykeyname;SharedAccessKey=Zm9vYmFy",
                id="Duplicate key",
            ),
            pytest.param(
                "HostName=my.host.name;DeviceId=my-device;SharedAccessKeyName=mykeyname;SharedAccessKey=Zm9vYmFy",
                id="Device connection string",
            ),
            pytest.param("HostName=;SharedAccessSignature=sas", id="Empty HostName"),
        ],
    )
    def test_raises_value_error_on_invalid_input(self, input_string):
        with pytest.raises(ValueError):
            ConnectionString(input_string)

    @pytest.mark.it("Raises TypeError on non-string input during instantiation")
    @pytest.mark.parametrize(
        "input_val",
        [
            pytest.param(2123, id="Integer"),
            pytest.param(23.098, id="Float"),
            pytest.param(object(), id="Complex object"),
            pytest.param(["a", "b"], id="List"),
            pytest.param({"a": "b"}, id="Dictionary"),
        ],
    )
    def test_raises_type_error_on_non_string_input(self, input_val):
        with pytest.raises(TypeError):
            ConnectionString(input_val)

    @pytest.mark.it("Uses the input connection string as a string representation")
    def test_string_representation_of_object_is_the_input_string(self):
        cs = ConnectionString(fake_connection_string)
        assert str(cs) == fake_connection_string

    @pytest.mark.it("Supports indexing syntax to return the stored value for a given key")
    def test_indexing_key_returns_corresponding_value(self):
        cs = ConnectionString(fake_connection_string)
        assert cs["HostName"] == "my.host.name"
        assert cs["SharedAccessKeyName"] == "mykeyname"
        assert cs["SharedAccessKey"] == "Zm9vYmFy"

    @pytest.mark.it("Raises KeyError if indexing on a key not contained in the ConnectionString")
    def test_indexing_key_raises_key_error_if_key_not_in_string(self):
        cs = ConnectionString(fake_connection_string)
        with pytest.raises(KeyError):
            cs["SharedAccessSignature"]

    @pytest.mark.it(
        "Supports the 'in' operator for validating if a key is contained in the ConnectionString"
    )
    def test_item_in_string(self):
        cs = ConnectionString(fake_connection_string)
        assert "SharedAccessKey" in cs
        assert "HostName" in cs
        assert "FakeKeyNotInTheString" not in cs

    @pytest.mark.it("Keeps '=' characters in values")
    def test_value_with_separator(self):
        cs = ConnectionString("HostName=my.host.name;SharedAccessKeyName=k;SharedAccessKey=Zm9v=")
        assert cs["SharedAccessKey"] == "Zm9v="


@pytest.mark.describe("ConnectionString - .get()")
class TestConnectionStringGet(object):
    @pytest.mark.it("Returns the stored value for a given key")
    def test_calling_get_with_key_returns_corresponding_value(self):
        cs = ConnectionString(fake_connection_string)
        assert cs.get("HostName") == "my.host.name"

    @pytest.mark.it("Returns None if the given key is invalid")
    def test_calling_get_with_invalid_key_and_no_default_value_returns_none(self):
        cs = ConnectionString(fake_connection_string)
        assert cs.get("invalidkey") is None

    @pytest.mark.it("Returns an optionally provided default value if the given key is invalid")
    def test_calling_get_with_invalid_key_and_a_default_value_returns_the_default_value(self):
        cs = ConnectionString(fake_connection_string)
        assert cs.get("invalidkey", "defaultval") == "defaultval"


@pytest.mark.describe("ConnectionString - Properties")
class TestConnectionStringProperties(object):
    @pytest.mark.it("Exposes the values of the connection string as properties")
    def test_properties(self):
        cs = ConnectionString(fake_connection_string)
        assert cs.host_name == "my.host.name"
        assert cs.shared_access_key_name == "mykeyname"
        assert cs.shared_access_key == "Zm9vYmFy"
        assert cs.shared_access_signature is None


@pytest.mark.describe("ConnectionString - .get_shared_access_signature()")
class TestConnectionStringGetSharedAccessSignature(object):
    @pytest.mark.it("Returns the SharedAccessSignature of the connection string if it has one")
    def test_existing_signature(self):
        sas = "SharedAccessSignature sr=my.host.name&sig=s&se=1"
        cs = ConnectionString("HostName=my.host.name;SharedAccessSignature={}".format(sas))
        assert cs.get_shared_access_signature() == sas

    @pytest.mark.it("Generates a signature from the shared access key, valid for the given TTL")
    def test_generated_signature(self, mocker):
        mocker.patch.object(time, "time", return_value=1000)
        cs = ConnectionString(fake_connection_string)
        sas = cs.get_shared_access_signature(ttl=60)
        assert sas.startswith("SharedAccessSignature sr=my.host.name&sig=")
        assert "&se=1060&" in sas
        assert sas.endswith("&skn=mykeyname")

    @pytest.mark.it("Generates a signature valid for one hour by default")
    def test_default_ttl(self, mocker):
        mocker.patch.object(time, "time", return_value=1000)
        cs = ConnectionString(fake_connection_string)
        assert "&se=4600&" in cs.get_shared_access_signature()
