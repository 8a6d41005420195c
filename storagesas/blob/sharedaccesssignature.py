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
import logging
from datetime import date

from ..common._common_conversion import (
    _str,
    _to_str,
)
from ..common._constants import (
    X_MS_VERSION,
    _MAX_SIGNED_IDENTIFIER_LENGTH,
)
from ..common._error import (
    _validate_can_cast_as_string,
    _validate_is_date_string,
    _validate_is_one_of,
    _validate_is_utf8_encodable,
    _validate_max_length,
    _validate_not_none,
    _validate_not_none_or_empty,
)
from ..common._serialization import (
    _encode_query_string,
    _to_utc_datetime,
)
from ..common.sharedaccesssignature import (
    QueryStringConstants,
    ResourceType,
    ServiceRoot,
    SharedAccessSignature,
)
from .models import _ACCESS_PERMISSIONS

logger = logging.getLogger(__name__)

_CANONICALIZED_RESOURCE = 'canonicalized_resource'

# Order of the fields in the string to sign. The service rebuilds the same
# string to verify the signature, so this order must not change.
_STRING_TO_SIGN_FIELDS = (
    QueryStringConstants.SIGNED_PERMISSION,
    QueryStringConstants.SIGNED_START,
    QueryStringConstants.SIGNED_EXPIRY,
    _CANONICALIZED_RESOURCE,
    QueryStringConstants.SIGNED_IDENTIFIER,
    QueryStringConstants.SIGNED_IP,
    QueryStringConstants.SIGNED_PROTOCOL,
    QueryStringConstants.SIGNED_VERSION,
    QueryStringConstants.SIGNED_RESOURCE,
    QueryStringConstants.SIGNED_SNAPSHOT_TIME,
    QueryStringConstants.SIGNED_ENCRYPTION_SCOPE,
    QueryStringConstants.SIGNED_CACHE_CONTROL,
    QueryStringConstants.SIGNED_CONTENT_DISPOSITION,
    QueryStringConstants.SIGNED_CONTENT_ENCODING,
    QueryStringConstants.SIGNED_CONTENT_LANGUAGE,
    QueryStringConstants.SIGNED_CONTENT_TYPE,
)

_SIGNED_RESOURCES = (
    ResourceType.RESOURCE_BLOB,
    ResourceType.RESOURCE_CONTAINER,
    ResourceType.RESOURCE_DIRECTORY,
)


def _to_date_string(value):
    if isinstance(value, date):
        return _to_utc_datetime(value)
    return value


class BlobSharedAccessSignature(object):
    '''
    Generates service shared access signatures for blobs, containers and
    directories. The signing itself is delegated to a
    :class:`~storagesas.common.sharedaccesssignature.SharedAccessSignature`.

    :param str account_name:
        The storage account name used to generate the shared access signature.
    :param str account_key:
        The base64 encoded access key used to sign.
    '''

    def __init__(self, account_name, account_key):
        self._signer = SharedAccessSignature(account_name, account_key)

    @property
    def account_name(self):
        return self._signer.account_name

    def generate_token(self, signed_resource, resource_name, signed_permissions,
                       signed_expiry, signed_start='', signed_ip='',
                       signed_protocol='', signed_identifier='',
                       signed_snapshot_time='', signed_encryption_scope='',
                       cache_control='', content_disposition='',
                       content_encoding='', content_language='',
                       content_type=''):
        '''
        Generates a blob service shared access signature token. All arguments
        are validated before anything is signed.

        :param str signed_resource:
            'b' for a blob, 'c' for a container or 'd' for a directory.
        :param str resource_name:
            The path of the resource: '{container}' for containers and
            '{container}/{blob}' for blobs and directories, e.g.
            'mymusic/music.mp3'.
        :param str signed_permissions:
            The permissions, in any order and case. Must only contain letters
            allowed for the signed resource; see
            :class:`~storagesas.blob.models.BlobPermissions`,
            :class:`~storagesas.blob.models.ContainerPermissions` and
            :class:`~storagesas.blob.models.DirectoryPermissions`.
        :param signed_expiry:
            The time at which the shared access signature becomes invalid.
            A date without timezone info is assumed to be UTC.
        :type signed_expiry: date or str
        :param signed_start:
            The time at which the shared access signature becomes valid.
        :type signed_start: date or str
        :param str signed_ip:
            An IP address or a range of IP addresses from which to accept
            requests, e.g. '168.1.5.60-168.1.5.70'.
        :param str signed_protocol:
            'https' or 'https,http'.
        :param str signed_identifier:
            A value up to 64 characters in length that correlates to a stored
            access policy.
        :param str signed_snapshot_time:
            The snapshot the signature grants access to.
        :param str signed_encryption_scope:
            The encryption scope to use for requests authorized by the signature.
        :param str cache_control:
            Response header value for Cache-Control.
        :param str content_disposition:
            Response header value for Content-Disposition.
        :param str content_encoding:
            Response header value for Content-Encoding.
        :param str content_language:
            Response header value for Content-Language.
        :param str content_type:
            Response header value for Content-Type.
        :return: The query string of the shared access signature.
        :rtype: str
        '''
        _validate_can_cast_as_string('signed_resource', signed_resource)
        _validate_not_none_or_empty('signed_resource', signed_resource)
        _validate_is_one_of('signed_resource', signed_resource, _SIGNED_RESOURCES)

        _validate_not_none_or_empty('resource_name', resource_name)
        _validate_can_cast_as_string('resource_name', resource_name)
        resource_name = _str(resource_name)
        _validate_is_utf8_encodable('resource_name', resource_name)

        signed_permissions = self._signer.sanitize_permissions(
            signed_permissions, _ACCESS_PERMISSIONS[signed_resource])

        signed_expiry = _to_date_string(signed_expiry)
        _validate_not_none_or_empty('signed_expiry', signed_expiry)
        _validate_can_cast_as_string('signed_expiry', signed_expiry)
        signed_expiry = _str(signed_expiry)
        _validate_is_date_string('signed_expiry', signed_expiry)

        signed_start = _to_date_string(signed_start)
        _validate_can_cast_as_string('signed_start', signed_start)
        signed_start = _to_str(signed_start) or ''
        if signed_start:
            _validate_is_date_string('signed_start', signed_start)

        _validate_can_cast_as_string('signed_ip', signed_ip)
        _validate_is_utf8_encodable('signed_ip', signed_ip)

        signed_protocol = self._signer.sanitize_protocol(signed_protocol)

        _validate_can_cast_as_string('signed_identifier', signed_identifier)
        signed_identifier = _to_str(signed_identifier) or ''
        _validate_is_utf8_encodable('signed_identifier', signed_identifier)
        _validate_max_length('signed_identifier', signed_identifier, _MAX_SIGNED_IDENTIFIER_LENGTH)

        _validate_can_cast_as_string('signed_snapshot_time', signed_snapshot_time)
        _validate_can_cast_as_string('signed_encryption_scope', signed_encryption_scope)
        _validate_can_cast_as_string('cache_control', cache_control)
        _validate_can_cast_as_string('content_disposition', content_disposition)
        _validate_can_cast_as_string('content_encoding', content_encoding)
        _validate_can_cast_as_string('content_language', content_language)
        _validate_can_cast_as_string('content_type', content_type)

        for name, value in (('signed_snapshot_time', signed_snapshot_time),
                            ('signed_encryption_scope', signed_encryption_scope),
                            ('cache_control', cache_control),
                            ('content_disposition', content_disposition),
                            ('content_encoding', content_encoding),
                            ('content_language', content_language),
                            ('content_type', content_type)):
            _validate_is_utf8_encodable(name, value)

        query_dict = {
            QueryStringConstants.SIGNED_PERMISSION: signed_permissions,
            QueryStringConstants.SIGNED_VERSION: X_MS_VERSION,
            QueryStringConstants.SIGNED_START: signed_start,
            QueryStringConstants.SIGNED_EXPIRY: signed_expiry,
            QueryStringConstants.SIGNED_RESOURCE: signed_resource,
        }

        def add_query(name, val):
            val = _to_str(val)
            if val:
                query_dict[name] = val

        add_query(QueryStringConstants.SIGNED_IDENTIFIER, signed_identifier)
        add_query(QueryStringConstants.SIGNED_IP, signed_ip)
        add_query(QueryStringConstants.SIGNED_PROTOCOL, signed_protocol)
        add_query(QueryStringConstants.SIGNED_SNAPSHOT_TIME, signed_snapshot_time)
        add_query(QueryStringConstants.SIGNED_ENCRYPTION_SCOPE, signed_encryption_scope)
        add_query(QueryStringConstants.SIGNED_CACHE_CONTROL, cache_control)
        add_query(QueryStringConstants.SIGNED_CONTENT_DISPOSITION, content_disposition)
        add_query(QueryStringConstants.SIGNED_CONTENT_ENCODING, content_encoding)
        add_query(QueryStringConstants.SIGNED_CONTENT_LANGUAGE, content_language)
        add_query(QueryStringConstants.SIGNED_CONTENT_TYPE, content_type)

        # the canonicalized resource always uses the blob root, whatever the
        # signed resource is; 'sr' narrows the scope
        canonicalized_resource = self._signer.generate_canonical_resource(
            ServiceRoot.BLOB, resource_name)

        string_to_sign = self._get_string_to_sign(query_dict, canonicalized_resource)
        query_dict[QueryStringConstants.SIGNED_SIGNATURE] = self._signer.sign(string_to_sign)

        logger.debug("Generated shared access signature for '%s' (sr=%s) with fields %s",
                     canonicalized_resource, signed_resource, ','.join(query_dict))

        return _encode_query_string(query_dict)

    @staticmethod
    def _get_string_to_sign(query_dict, canonicalized_resource):
        values = dict(query_dict)
        values[_CANONICALIZED_RESOURCE] = canonicalized_resource
        return '\n'.join([values.get(field, '') for field in _STRING_TO_SIGN_FIELDS])

    def generate_blob(self, container_name, blob_name, permission=None,
                      expiry=None, start=None, id=None, ip=None, protocol=None,
                      snapshot=None, encryption_scope=None,
                      cache_control=None, content_disposition=None,
                      content_encoding=None, content_language=None,
                      content_type=None):
        '''
        Generates a shared access signature for the blob.
        Append the returned token to the blob URL after a '?'.

        :param str container_name:
            Name of container.
        :param str blob_name:
            Name of blob.
        :param BlobPermissions permission:
            The permissions associated with the shared access signature.
        :param expiry:
            The time at which the shared access signature becomes invalid.
        :type expiry: date or str
        :param start:
            The time at which the shared access signature becomes valid.
        :type start: date or str
        :param str id:
            A unique value up to 64 characters in length that correlates to a
            stored access policy.
        :param str ip:
            Specifies an IP address or a range of IP addresses from which to accept requests.
        :param str protocol:
            'https' or 'https,http'.
        :param str snapshot:
            The snapshot to grant access to.
        :param str encryption_scope:
            The encryption scope of the requests.
        :return: A Shared Access Signature (sas) token.
        :rtype: str
        '''
        _validate_not_none('container_name', container_name)
        _validate_not_none('blob_name', blob_name)

        return self.generate_token(
            ResourceType.RESOURCE_BLOB,
            _str(container_name) + '/' + _str(blob_name),
            permission,
            expiry,
            signed_start=start,
            signed_ip=ip,
            signed_protocol=protocol,
            signed_identifier=id,
            signed_snapshot_time=snapshot,
            signed_encryption_scope=encryption_scope,
            cache_control=cache_control,
            content_disposition=content_disposition,
            content_encoding=content_encoding,
            content_language=content_language,
            content_type=content_type,
        )

    def generate_container(self, container_name, permission=None, expiry=None,
                           start=None, id=None, ip=None, protocol=None,
                           encryption_scope=None,
                           cache_control=None, content_disposition=None,
                           content_encoding=None, content_language=None,
                           content_type=None):
        '''
        Generates a shared access signature for the container.
        Takes the same arguments as :func:`generate_blob`, apart from blob_name
        and snapshot.

        :param str container_name:
            Name of container.
        :param ContainerPermissions permission:
            The permissions associated with the shared access signature.
        :return: A Shared Access Signature (sas) token.
        :rtype: str
        '''
        _validate_not_none('container_name', container_name)

        return self.generate_token(
            ResourceType.RESOURCE_CONTAINER,
            container_name,
            permission,
            expiry,
            signed_start=start,
            signed_ip=ip,
            signed_protocol=protocol,
            signed_identifier=id,
            signed_encryption_scope=encryption_scope,
            cache_control=cache_control,
            content_disposition=content_disposition,
            content_encoding=content_encoding,
            content_language=content_language,
            content_type=content_type,
        )

    def generate_directory(self, container_name, directory_name, permission=None,
                           expiry=None, start=None, id=None, ip=None, protocol=None,
                           encryption_scope=None,
                           cache_control=None, content_disposition=None,
                           content_encoding=None, content_language=None,
                           content_type=None):
        '''
        Generates a shared access signature for a directory of an account with
        a hierarchical namespace.

        :param str container_name:
            Name of container.
        :param str directory_name:
            Path of the directory inside the container.
        :param DirectoryPermissions permission:
            The permissions associated with the shared access signature.
        :return: A Shared Access Signature (sas) token.
        :rtype: str
        '''
        _validate_not_none('container_name', container_name)
        _validate_not_none('directory_name', directory_name)

        return self.generate_token(
            ResourceType.RESOURCE_DIRECTORY,
            _str(container_name) + '/' + _str(directory_name),
            permission,
            expiry,
            signed_start=start,
            signed_ip=ip,
            signed_protocol=protocol,
            signed_identifier=id,
            signed_encryption_scope=encryption_scope,
            cache_control=cache_control,
            content_disposition=content_disposition,
            content_encoding=content_encoding,
            content_language=content_language,
            content_type=content_type,
        )
