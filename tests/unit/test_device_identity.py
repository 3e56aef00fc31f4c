# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------

import pytest
import logging
import copy
from azure.iot.registry import device_identity

logging.basicConfig(level=logging.DEBUG)

fake_device_id = "MyPensieve"
fake_thumbprint = {"primaryThumbprint": "HELFKCPOXAIR9PVNOA3", "secondaryThumbprint": None}


@pytest.mark.describe("normalize_device_identity()")
class TestNormalizeDeviceIdentity(object):
    @pytest.mark.it("Adds SAS authentication with empty keys if the identity has no authentication")
    @pytest.mark.parametrize(
        "device_info",
        [
            pytest.param({"deviceId": fake_device_id}, id="No authentication"),
            pytest.param(
                {"deviceId": fake_device_id, "authentication": None}, id="None authentication"
            ),
        ],
    )
    def test_no_authentication(self, device_info):
        normalized = device_identity.normalize_device_identity(device_info)
        assert normalized["authentication"] == {
            "type": "sas",
            "symmetricKey": {"primaryKey": "", "secondaryKey": ""},
        }

    @pytest.mark.it("Sets the type to 'selfSigned' if the authentication has a thumbprint but no type")
    def test_thumbprint(self):
        normalized = device_identity.normalize_device_identity(
            {"deviceId": fake_device_id, "authentication": {"x509Thumbprint": fake_thumbprint}}
        )
        assert normalized["authentication"] == {
            "type": "selfSigned",
            "x509Thumbprint": fake_thumbprint,
        }

    @pytest.mark.it("Sets the type to 'sas' if the authentication has neither a thumbprint nor a type")
    @pytest.mark.parametrize(
        "authentication",
        [
            pytest.param({"symmetricKey": {"primaryKey": "abc"}}, id="Symmetric key"),
            pytest.param({}, id="Empty authentication"),
        ],
    )
    def test_sas(self, authentication):
        normalized = device_identity.normalize_device_identity(
            {"deviceId": fake_device_id, "authentication": authentication}
        )
        assert normalized["authentication"]["type"] == "sas"
        for key, value in authentication.items():
            assert normalized["authentication"][key] == value

    @pytest.mark.it("Keeps the authentication unchanged if it has a type")
    @pytest.mark.parametrize(
        "authentication",
        [
            pytest.param({"type": "certificateAuthority"}, id="Certificate authority"),
            pytest.param(
                {"type": "sas", "x509Thumbprint": fake_thumbprint},
                id="Explicit type with thumbprint",
            ),
        ],
    )
    def test_explicit_type(self, authentication):
        normalized = device_identity.normalize_device_identity(
            {"deviceId": fake_device_id, "authentication": authentication}
        )
        assert normalized["authentication"] == authentication

    @pytest.mark.it("Keeps the other properties of the identity")
    def test_other_properties(self):
        device_info = {"deviceId": fake_device_id, "status": "disabled", "etag": "tag"}
        normalized = device_identity.normalize_device_identity(device_info)
        assert normalized["deviceId"] == fake_device_id
        assert normalized["status"] == "disabled"
        assert normalized["etag"] == "tag"

    @pytest.mark.it("Returns a copy, sharing no state with the given identity")
    def test_copy(self):
        device_info = {"deviceId": fake_device_id, "authentication": {"symmetricKey": {}}}
        original = copy.deepcopy(device_info)

        normalized = device_identity.normalize_device_identity(device_info)
        normalized["authentication"]["symmetricKey"]["primaryKey"] = "changed"

        assert device_info == original


@pytest.mark.describe("to_import_export_entry()")
class TestToImportExportEntry(object):
    @pytest.mark.it("Renames deviceId to id, and adds the import mode")
    def test_entry(self):
        entry = device_identity.to_import_export_entry(
            {"deviceId": fake_device_id, "status": "enabled"}, device_identity.IMPORT_MODE_CREATE
        )
        assert entry == {
            "id": fake_device_id,
            "importMode": "create",
            "status": "enabled",
            "authentication": {
                "type": "sas",
                "symmetricKey": {"primaryKey": "", "secondaryKey": ""},
            },
        }
        assert "deviceId" not in entry

    @pytest.mark.it("Overrides any id or importMode carried by the identity")
    @pytest.mark.parametrize(
        "import_mode",
        [
            pytest.param(device_identity.IMPORT_MODE_CREATE, id="create"),
            pytest.param(device_identity.IMPORT_MODE_UPDATE_IF_MATCH_ETAG, id="UpdateIfMatchETag"),
        ],
    )
    def test_overrides_entry_keys(self, import_mode):
        entry = device_identity.to_import_export_entry(
            {"deviceId": fake_device_id, "id": "other", "importMode": "Delete"}, import_mode
        )
        assert entry["id"] == fake_device_id
        assert entry["importMode"] == import_mode
        assert "deviceId" not in entry

    @pytest.mark.it("Does not modify the given identity")
    def test_input_not_modified(self):
        device_info = {"deviceId": fake_device_id}
        device_identity.to_import_export_entry(device_info, device_identity.IMPORT_MODE_DELETE)
        assert device_info == {"deviceId": fake_device_id}


@pytest.mark.describe("Import modes")
class TestImportModes(object):
    @pytest.mark.it("Uses 'Update' for forced updates and 'UpdateIfMatchETag' otherwise")
    def test_update(self):
        assert device_identity.get_update_import_mode(True) == "Update"
        assert device_identity.get_update_import_mode(False) == "UpdateIfMatchETag"

    @pytest.mark.it("Uses 'Delete' for forced removals and 'DeleteIfMatchETag' otherwise")
    def test_remove(self):
        assert device_identity.get_remove_import_mode(True) == "Delete"
        assert device_identity.get_remove_import_mode(False) == "DeleteIfMatchETag"
