#-------------------------------------------------------------------------
# Copyright (c) Microsoft.  All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#--------------------------------------------------------------------------
import base64
import hashlib
import hmac


def _str(value):
    if isinstance(value, str):
        return value
    return str(value)


def _to_str(value):
    return _str(value) if value is not None else None


def _encode_base64(data):
    if isinstance(data, str):
        data = data.encode('utf-8')
    encoded = base64.b64encode(data)
    return encoded.decode('utf-8')


def _decode_base64_to_bytes(data):
    if isinstance(data, str):
        data = data.encode('utf-8')
    return base64.b64decode(data, validate=True)


def _sign_string(key, string_to_sign, key_is_base64=True):
    if key_is_base64:
        key = bytearray(_decode_base64_to_bytes(key))
    else:
        if isinstance(key, str):
            key = key.encode('utf-8')
        if not isinstance(key, bytearray):
            key = bytearray(key)
    if isinstance(string_to_sign, str):
        string_to_sign = string_to_sign.encode('utf-8')
    try:
        signed_hmac_sha256 = hmac.HMAC(key, string_to_sign, hashlib.sha256)
        digest = signed_hmac_sha256.digest()
    finally:
        # the decoded key only lives for the duration of the hash
        key[:] = bytes(len(key))
    encoded_digest = _encode_base64(digest)
    return encoded_digest
