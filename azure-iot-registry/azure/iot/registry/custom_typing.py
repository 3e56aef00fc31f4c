# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
from typing import Any, Dict, List, Tuple, Union
from typing_extensions import Literal


# typing does not support recursion, so we must use forward references here (PEP484)
JSONSerializable = Union[
    Dict[str, "JSONSerializable"],
    List["JSONSerializable"],
    Tuple["JSONSerializable", ...],
    str,
    int,
    float,
    bool,
    None,
]

DeviceIdentity = Dict[str, Any]
TwinPatch = Dict[str, JSONSerializable]

ImportMode = Literal["create", "Update", "UpdateIfMatchETag", "Delete", "DeleteIfMatchETag"]
