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
from datetime import datetime, timedelta, timezone

from storagesas.blob import (
    BlobPermissions,
    ContainerPermissions,
    DirectoryPermissions,
)


class BlobSasSamples():
    def __init__(self, account):
        self.account = account

    def run_all_samples(self):
        self.sas = self.account.create_blob_shared_access_signature()

        return [
            self.container_sas(),
            self.blob_sas(),
            self.directory_sas(),
            self.sas_with_signed_identifiers(),
        ]

    def _make_url(self, resource_name, token):
        return 'https://{}.blob.core.windows.net/{}?{}'.format(
            self.account.account_name, resource_name, token)

    def container_sas(self):
        # Access only to the blobs in the given container
        # Read and list permissions, expires in an hour
        token = self.sas.generate_container(
            'mycontainer',
            permission=ContainerPermissions.READ + ContainerPermissions.LIST,
            expiry=datetime.now(timezone.utc) + timedelta(hours=1),
        )

        return self._make_url('mycontainer', token)

    def blob_sas(self):
        # Access to a single blob, https only, with a content type override
        token = self.sas.generate_blob(
            'mycontainer',
            'music/music.mp3',
            permission=BlobPermissions.READ,
            expiry=datetime.now(timezone.utc) + timedelta(hours=1),
            protocol='https',
            content_type='audio/mpeg',
        )

        return self._make_url('mycontainer/music/music.mp3', token)

    def directory_sas(self):
        # Directory level access requires an account with a hierarchical namespace
        token = self.sas.generate_directory(
            'mycontainer',
            'music',
            permission=DirectoryPermissions.READ + DirectoryPermissions.LIST,
            expiry=datetime.now(timezone.utc) + timedelta(hours=1),
        )

        return self._make_url('mycontainer/music', token)

    def sas_with_signed_identifiers(self):
        # The stored access policy 'readpolicy' must be set on the container
        # and carries the permissions, so they are omitted here
        token = self.sas.generate_token(
            'c',
            'mycontainer',
            '',
            datetime.now(timezone.utc) + timedelta(hours=1),
            signed_identifier='readpolicy',
        )

        return self._make_url('mycontainer', token)
