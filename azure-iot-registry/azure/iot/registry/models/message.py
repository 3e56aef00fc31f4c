# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains a class representing messages that are sent to or received from devices.
"""


class Message(object):
    """Represents a message to or from a device

    :ivar data: The data that constitutes the payload
    :ivar dict properties: Dictionary of custom message properties
    :ivar str message_id: Used to correlate two-way communication. Format: A case-sensitive string (up to 128 characters long) of ASCII 7-bit alphanumeric characters + {'-', ':', '.', '+', '%', '_', '#', '*', '?', '!', '(', ')', ',', '=', '@', ';', '$', '''}
    :ivar str to: Destination of the message
    :ivar expiry_time_utc: Expiry time in UTC, interpreted by the hub on cloud-to-device messages. Ignored in other cases.
    :ivar str lock_token: Used by the receiver to abandon, reject or complete the message
    :ivar str correlation_id: Used in message responses and feedback
    :ivar str user_id: Used to specify the entity creating the message
    :ivar str ack: The kind of feedback requested for a cloud-to-device message
    """

    def __init__(self, data):
        """
        Initializer for Message

        :param data: The data that constitutes the payload
        """
        self.data = data
        self.properties = {}
        self.message_id = ""
        self.to = ""
        self.expiry_time_utc = None
        self.lock_token = ""
        self.correlation_id = ""
        self.user_id = ""
        self.ack = None

    def __str__(self):
        return str(self.data)

    def get_data(self):
        """Return the data exactly as it was passed to the initializer"""
        return self.data

    def get_bytes(self):
        """Return the data as bytes.

        bytes are returned unaltered, str is encoded as UTF-8, and any other type is converted
        to bytes where possible, or through its string representation otherwise.
        """
        if isinstance(self.data, bytes):
            return self.data
        elif isinstance(self.data, str):
            return self.data.encode("utf-8")
        elif isinstance(self.data, (bytearray, memoryview)):
            return bytes(self.data)
        elif isinstance(self.data, list) and all(isinstance(x, int) for x in self.data):
            return bytes(self.data)
        else:
            return str(self.data).encode("utf-8")
