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
import binascii

from ._common_conversion import (
    _decode_base64_to_bytes,
    _sign_string,
)
from ._error import (
    AzureSigningError,
    _ERROR_DECODE_ACCOUNT_KEY,
    _ERROR_INVALID_PERMISSIONS,
    _ERROR_INVALID_PROTOCOL,
    _validate_can_cast_as_string,
    _wrap_exception,
)


class ResourceType(object):
    RESOURCE_BLOB = 'b'
    RESOURCE_CONTAINER = 'c'
    RESOURCE_DIRECTORY = 'd'


class ServiceRoot(object):
    '''
    Root segment of the canonicalized resource for each resource family.
    '''
    BLOB = 'blob'
    QUEUE = 'queue'
    TABLE = 'table'
    FILE = 'file'


class QueryStringConstants(object):
    SIGNED_SIGNATURE = 'sig'
    SIGNED_PERMISSION = 'sp'
    SIGNED_START = 'st'
    SIGNED_EXPIRY = 'se'
    SIGNED_RESOURCE = 'sr'
    SIGNED_IDENTIFIER = 'si'
    SIGNED_IP = 'sip'
    SIGNED_PROTOCOL = 'spr'
    SIGNED_VERSION = 'sv'
    SIGNED_SNAPSHOT_TIME = 'sst'
    SIGNED_ENCRYPTION_SCOPE = 'ses'
    SIGNED_CACHE_CONTROL = 'rscc'
    SIGNED_CONTENT_DISPOSITION = 'rscd'
    SIGNED_CONTENT_ENCODING = 'rsce'
    SIGNED_CONTENT_LANGUAGE = 'rdcl'
    SIGNED_CONTENT_TYPE = 'rdct'


class Protocol(object):
    HTTPS = 'https'
    HTTPS_HTTP = 'https,http'


class SharedAccessSignature(object):
    '''
    Holds the account identity and provides the signing primitives shared by
    every resource family. Token builders compose an instance of this class.

    :ivar str account_name:
        The storage account name used to generate the shared access signature.
    :ivar str account_key:
        The base64 encoded access key used to sign. It is only decoded when
        a string is signed.
    '''

    def __init__(self, account_name, account_key):
        self._account_name = account_name
        self._account_key = account_key

    @property
    def account_name(self):
        return self._account_name

    @property
    def account_key(self):
        return self._account_key

    def generate_canonical_resource(self, service, resource_name):
        '''
        Builds the canonicalized resource '/{service}/{account}/{resource}'.
        The resource name is used verbatim; a single leading '/' is dropped.
        '''
        if resource_name.startswith('/'):
            resource_name = resource_name[1:]

        return '/' + service + '/' + self._account_name + '/' + resource_name

    @staticmethod
    def sanitize_permissions(permissions, allowed):
        '''
        Validates the requested permissions against an ordered alphabet and
        returns them re-ordered into the alphabet's order.

        :param str permissions:
            The requested permissions, in any order and case.
        :param str allowed:
            The allowed permission characters in their canonical order.
        :return: The sanitized permissions.
        :rtype: str
        '''
        _validate_can_cast_as_string('permissions', permissions)
        requested = '' if permissions is None else str(permissions).lower()

        sanitized = ''.join([p for p in allowed if p in requested])
        if len(sanitized) != len(requested):
            raise ValueError(_ERROR_INVALID_PERMISSIONS.format(requested, ', '.join(allowed)))

        return sanitized

    @staticmethod
    def sanitize_protocol(protocol):
        '''
        Validates the signed protocol. Returns '' when no protocol is given,
        'https' or 'https,http' otherwise.
        '''
        _validate_can_cast_as_string('signed_protocol', protocol)
        if not protocol:
            return ''

        requested = [p.strip() for p in str(protocol).lower().split(',')]
        if requested == [Protocol.HTTPS]:
            return Protocol.HTTPS
        if sorted(requested) == ['http', 'https']:
            return Protocol.HTTPS_HTTP

        raise ValueError(_ERROR_INVALID_PROTOCOL.format(protocol))

    def sign(self, string_to_sign):
        '''
        Signs the string with HMAC-SHA256 under the decoded account key.

        :param str string_to_sign:
            The canonical string to sign.
        :return: The base64 encoded signature.
        :rtype: str
        '''
        try:
            key = bytearray(_decode_base64_to_bytes(self._account_key))
        except (binascii.Error, TypeError) as ex:
            raise _wrap_exception(ex, AzureSigningError, _ERROR_DECODE_ACCOUNT_KEY)

        return _sign_string(key, string_to_sign, key_is_base64=False)
