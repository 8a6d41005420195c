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

# Note that we import BlobSharedAccessSignature on demand
# because this module is imported by storagesas.common
# ie. we don't want 'import storagesas.common' to trigger an automatic import
# of the blob package.

from ._error import (
    _ERROR_INVALID_CONNECTION_STRING,
    _ERROR_STORAGE_MISSING_INFO,
    _validate_not_none,
)

_CONNECTION_STRING_ACCOUNT_NAME = 'accountname'
_CONNECTION_STRING_ACCOUNT_KEY = 'accountkey'


def _parse_connection_string(connection_string):
    '''
    Splits 'Key1=Value1;Key2=Value2' into a dict with lower-cased keys.
    Values may contain '=' (base64 padding), so each pair is split once.
    '''
    settings = {}
    for pair in connection_string.split(';'):
        pair = pair.strip()
        if not pair:
            continue
        if '=' not in pair:
            raise ValueError(_ERROR_INVALID_CONNECTION_STRING)
        key, value = pair.split('=', 1)
        settings[key.strip().lower()] = value.strip()
    return settings


class CloudStorageAccount(object):

    """
    Provides a factory for creating the shared access signature generators
    with a common account name and account key. Users can either use the
    factory or can construct the appropriate generator directly.
    """

    def __init__(self, account_name=None, account_key=None):
        self.account_name = account_name
        self.account_key = account_key

    @classmethod
    def from_connection_string(cls, connection_string):
        '''
        Creates the account from a storage connection string such as
        'DefaultEndpointsProtocol=https;AccountName=myaccount;AccountKey=...'.
        Keys are matched case-insensitively and unknown keys are ignored.

        :param str connection_string:
            The storage account connection string.
        '''
        _validate_not_none('connection_string', connection_string)
        settings = _parse_connection_string(connection_string)

        account_name = settings.get(_CONNECTION_STRING_ACCOUNT_NAME)
        account_key = settings.get(_CONNECTION_STRING_ACCOUNT_KEY)
        if not account_name or not account_key:
            raise ValueError(_ERROR_STORAGE_MISSING_INFO)

        return cls(account_name, account_key)

    def create_blob_shared_access_signature(self):
        '''
        Creates a generator for blob, container and directory shared access
        signatures signed with this account's key.

        :rtype: ~storagesas.blob.sharedaccesssignature.BlobSharedAccessSignature
        '''
        _validate_not_none('self.account_name', self.account_name)
        _validate_not_none('self.account_key', self.account_key)

        from ..blob.sharedaccesssignature import BlobSharedAccessSignature
        return BlobSharedAccessSignature(self.account_name, self.account_key)
