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
import unittest
from datetime import date, datetime
from unittest import mock

from dateutil.tz import tzoffset

from storagesas.blob import (
    BlobPermissions,
    BlobSharedAccessSignature,
    ContainerPermissions,
    DirectoryPermissions,
)
from storagesas.common import (
    AzureSigningError,
    SharedAccessSignature,
    X_MS_VERSION,
)
from tests.testcase import StorageTestCase

# Signatures below were computed independently with
# openssl dgst -sha256 -mac HMAC over the expected string to sign
# under the base64 decoded fake STORAGE_ACCOUNT_KEY.
_CONTAINER_SIG = '8cZH6ZDfXUDNCQzmrboDnqSf0xramgqy2vr/P5vcBWw='
_BLOB_SIG = 'GuRduWNkcc6YFtPIBPjOLefmVAWkRFoFvvZ5Lgjr020='
_DIRECTORY_ALL_FIELDS_SIG = 'Lh2NADdiPq16GZEOGBKlCDpQYIM+XaavKzjtV9NGRTY='
_CONTAINER_HELPER_SIG = 'JenhakCsQBLteQabnaS8pZfQqEZb/6fS9NvUUZDwZFI='

_REQUIRED_FIELDS = ['sp', 'sv', 'st', 'se', 'sr', 'sig']


class StorageBlobSASTest(StorageTestCase):

    def setUp(self):
        super(StorageBlobSASTest, self).setUp()
        self.account_key = self.fake_settings.STORAGE_ACCOUNT_KEY
        self.sas = BlobSharedAccessSignature('contosostorage', self.account_key)

    # --Helpers-----------------------------------------------------------------
    def _generate_blob_token(self, **kwargs):
        return self.sas.generate_token('b', 'music/music.mp3', 'r', '2016-10-01T00:00:00Z', **kwargs)

    # --Test cases for generate_token ------------------------------------------
    def test_generate_token_for_blob(self):
        # Act
        token = self._generate_blob_token()

        # Assert
        self.assertEqual(
            token,
            'sp=r&sv=' + X_MS_VERSION + '&st=&se=2016-10-01T00%3A00%3A00Z&sr=b'
            '&sig=GuRduWNkcc6YFtPIBPjOLefmVAWkRFoFvvZ5Lgjr020%3D')
        self.assertIn('sr=b', token)
        self.assertIn('sp=r', token)
        self.assertIn('se=2016-10-01T00%3A00%3A00Z', token)
        self.assertEqual(self.parse_token(token)['sig'], _BLOB_SIG)

    def test_generate_token_for_container(self):
        # Arrange
        sas = BlobSharedAccessSignature('myaccount', self.account_key)

        # Act
        token = sas.generate_token('c', 'mycontainer', 'rwd', '2025-01-01T00:00:00Z', signed_start='')

        # Assert
        fields = self.parse_token(token)
        self.assertEqual(fields['sig'], _CONTAINER_SIG)
        self.assertEqual(fields['sp'], 'rwd')
        self.assertEqual(fields['sr'], 'c')
        self.assertEqual(fields['st'], '')

    def test_generate_token_with_all_fields(self):
        # Act
        token = self.sas.generate_token(
            'd',
            'music',
            'wr',
            '2016-10-01T00:00:00Z',
            signed_start='2016-09-01T00:00:00Z',
            signed_ip='168.1.5.60-168.1.5.70',
            signed_protocol='https',
            signed_identifier='readpolicy',
            signed_snapshot_time='2016-09-15T00:00:00Z',
            signed_encryption_scope='myscope',
            cache_control='no-cache',
            content_disposition='attachment',
            content_encoding='gzip',
            content_language='en-US',
            content_type='text/plain',
        )

        # Assert
        self.assertEqual(
            token,
            'sp=rw&sv=' + X_MS_VERSION +
            '&st=2016-09-01T00%3A00%3A00Z&se=2016-10-01T00%3A00%3A00Z&sr=d'
            '&si=readpolicy&sip=168.1.5.60-168.1.5.70&spr=https'
            '&sst=2016-09-15T00%3A00%3A00Z&ses=myscope'
            '&rscc=no-cache&rscd=attachment&rsce=gzip&rdcl=en-US&rdct=text%2Fplain'
            '&sig=Lh2NADdiPq16GZEOGBKlCDpQYIM%2BXaavKzjtV9NGRTY%3D')
        self.assertEqual(self.parse_token(token)['sig'], _DIRECTORY_ALL_FIELDS_SIG)

    def test_generate_token_omits_empty_optional_fields(self):
        # Act
        token = self._generate_blob_token(
            signed_ip='', signed_protocol='', signed_identifier=None,
            signed_snapshot_time='', signed_encryption_scope=None,
            cache_control='', content_disposition=None, content_encoding='',
            content_language=None, content_type='')

        # Assert
        self.assertQueryFields(token, _REQUIRED_FIELDS)
        self.assertEqual(self.parse_token(token)['sig'], _BLOB_SIG)

    def test_generate_token_is_deterministic(self):
        # Arrange
        other = BlobSharedAccessSignature('contosostorage', self.account_key)

        # Act
        token1 = self._generate_blob_token(signed_ip='168.1.5.65', signed_protocol='https')
        token2 = self._generate_blob_token(signed_ip='168.1.5.65', signed_protocol='https')
        token3 = other.generate_token('b', 'music/music.mp3', 'r', '2016-10-01T00:00:00Z',
                                      signed_ip='168.1.5.65', signed_protocol='https')

        # Assert
        self.assertEqual(token1, token2)
        self.assertEqual(token1, token3)

    def test_generate_token_depends_on_key(self):
        # Arrange
        other = BlobSharedAccessSignature('contosostorage', self.fake_settings.REMOTE_STORAGE_ACCOUNT_KEY)

        # Act
        sig1 = self.parse_token(self._generate_blob_token())['sig']
        sig2 = self.parse_token(other.generate_token('b', 'music/music.mp3', 'r', '2016-10-01T00:00:00Z'))['sig']

        # Assert
        self.assertNotEqual(sig1, sig2)

    def test_generate_token_canonical_resource_ignores_signed_resource(self):
        # Arrange
        captured = []
        real_sign = SharedAccessSignature.sign

        def capture(signer, string_to_sign):
            captured.append(string_to_sign)
            return real_sign(signer, string_to_sign)

        # Act
        with mock.patch.object(SharedAccessSignature, 'sign', autospec=True, side_effect=capture):
            self.sas.generate_token('b', 'photos/cat.png', 'r', '2016-10-01T00:00:00Z')
            self.sas.generate_token('c', 'photos', 'l', '2016-10-01T00:00:00Z')
            self.sas.generate_token('d', 'photos/2016', 'l', '2016-10-01T00:00:00Z')

        # Assert
        resources = [s.split('\n')[3] for s in captured]
        self.assertEqual(resources, [
            '/blob/contosostorage/photos/cat.png',
            '/blob/contosostorage/photos',
            '/blob/contosostorage/photos/2016',
        ])

    def test_generate_token_string_to_sign_keeps_empty_slots(self):
        # Arrange
        with mock.patch.object(SharedAccessSignature, 'sign', return_value='c2ln') as sign:
            # Act
            token = self.sas.generate_token('b', 'music/music.mp3', 'r', '2016-10-01T00:00:00Z',
                                            content_type='audio/mpeg')

        # Assert
        string_to_sign = sign.call_args[0][0]
        fields = string_to_sign.split('\n')
        self.assertEqual(len(fields), 16)
        self.assertEqual(fields[7], X_MS_VERSION)
        self.assertEqual(fields[8], 'b')
        self.assertEqual(fields[15], 'audio/mpeg')
        self.assertEqual(fields[9:15], [''] * 6)
        self.assertTrue(token.endswith('&rdct=audio%2Fmpeg&sig=c2ln'))

    def test_generate_token_permissions_are_canonicalized(self):
        # Act
        blob_token = self.sas.generate_token('b', 'music/music.mp3', 'WR', '2016-10-01T00:00:00Z')
        container_token = self.sas.generate_token('c', 'music', 'LdcAWr', '2016-10-01T00:00:00Z')
        directory_token = self.sas.generate_token('d', 'music/2016', 'POEMlr', '2016-10-01T00:00:00Z')

        # Assert
        self.assertEqual(self.parse_token(blob_token)['sp'], 'rw')
        self.assertEqual(self.parse_token(container_token)['sp'], 'racwdl')
        self.assertEqual(self.parse_token(directory_token)['sp'], 'rlmeop')

    def test_generate_token_permissions_alphabet_per_resource(self):
        # 'l' is a container and directory permission only
        with self.assertRaises(ValueError):
            self.sas.generate_token('b', 'music/music.mp3', 'rl', '2016-10-01T00:00:00Z')

        # 'f' is a container permission only
        with self.assertRaises(ValueError):
            self.sas.generate_token('d', 'music/2016', 'rf', '2016-10-01T00:00:00Z')

        # 'm' is a directory permission only
        with self.assertRaises(ValueError):
            self.sas.generate_token('c', 'music', 'rm', '2016-10-01T00:00:00Z')

    def test_generate_token_invalid_permissions_do_not_sign(self):
        with mock.patch.object(SharedAccessSignature, 'sign') as sign:
            with self.assertRaises(ValueError) as e:
                self.sas.generate_token('b', 'music/music.mp3', 'rz', '2016-10-01T00:00:00Z')

        self.assertIn("'rz'", str(e.exception))
        sign.assert_not_called()

    def test_generate_token_rejects_numeric_zero_permissions(self):
        with mock.patch.object(SharedAccessSignature, 'sign') as sign:
            with self.assertRaises(ValueError) as e:
                self.sas.generate_token('b', 'music/music.mp3', 0, '2016-10-01T00:00:00Z')

        self.assertIn("'0'", str(e.exception))
        sign.assert_not_called()

    def test_generate_token_identifier_length(self):
        # Act
        token = self._generate_blob_token(signed_identifier='a' * 64)

        # Assert
        self.assertEqual(self.parse_token(token)['si'], 'a' * 64)
        with self.assertRaises(ValueError) as e:
            self._generate_blob_token(signed_identifier='a' * 65)
        self.assertIn('signed_identifier', str(e.exception))

    def test_generate_token_protocol(self):
        # Act
        https = self._generate_blob_token(signed_protocol='https')
        both = self._generate_blob_token(signed_protocol='https,http')
        reversed_both = self._generate_blob_token(signed_protocol='HTTP, HTTPS')

        # Assert
        self.assertEqual(self.parse_token(https)['spr'], 'https')
        self.assertEqual(self.parse_token(both)['spr'], 'https,http')
        self.assertEqual(both, reversed_both)

        for protocol in ['http', 'ftp', 'https,ftp', 'https,https']:
            with self.assertRaises(ValueError) as e:
                self._generate_blob_token(signed_protocol=protocol)
            self.assertIn('signed_protocol', str(e.exception))

    def test_generate_token_with_datetime_values(self):
        # Arrange
        start = datetime(2016, 9, 1, 10, 30, tzinfo=tzoffset(None, 7200))

        # Act
        token = self.sas.generate_token('c', 'photos', 'rl', date(2016, 10, 1), signed_start=start)

        # Assert
        fields = self.parse_token(token)
        self.assertEqual(fields['st'], '2016-09-01T08:30:00Z')
        self.assertEqual(fields['se'], '2016-10-01T00:00:00Z')

    def test_generate_token_invalid_arguments(self):
        cases = [
            ('signed_resource', dict(signed_resource='x')),
            ('signed_resource', dict(signed_resource='')),
            ('signed_resource', dict(signed_resource=None)),
            ('resource_name', dict(resource_name='')),
            ('resource_name', dict(resource_name=None)),
            ('signed_expiry', dict(signed_expiry='')),
            ('signed_expiry', dict(signed_expiry=None)),
            ('signed_expiry', dict(signed_expiry='not a date')),
            ('signed_start', dict(signed_start='not a date')),
            ('signed_ip', dict(signed_ip=['168.1.5.65'])),
            ('signed_identifier', dict(signed_identifier=object())),
            ('signed_snapshot_time', dict(signed_snapshot_time=b'2016-09-15')),
            ('cache_control', dict(cache_control={'no-cache': True})),
            ('content_disposition', dict(content_disposition=b'attachment')),
            ('content_encoding', dict(content_encoding=['gzip'])),
            ('content_language', dict(content_language=object())),
            ('content_type', dict(content_type=b'text/plain')),
        ]

        for field, override in cases:
            kwargs = dict(signed_resource='b', resource_name='music/music.mp3',
                          signed_permissions='r', signed_expiry='2016-10-01T00:00:00Z')
            kwargs.update(override)
            with mock.patch.object(SharedAccessSignature, 'sign') as sign:
                with self.assertRaises(ValueError) as e:
                    self.sas.generate_token(**kwargs)
            self.assertIn(field, str(e.exception))
            sign.assert_not_called()

    def test_generate_token_invalid_key(self):
        # Arrange
        sas = BlobSharedAccessSignature('contosostorage', 'this is not base64!')

        # Act
        with self.assertRaises(AzureSigningError) as e:
            sas.generate_token('b', 'music/music.mp3', 'r', '2016-10-01T00:00:00Z')

        # Assert
        self.assertNotIn('this is not base64!', str(e.exception))

    def test_generate_token_unencodable_resource_name(self):
        # Act
        with mock.patch.object(SharedAccessSignature, 'sign') as sign:
            with self.assertRaises(ValueError) as e:
                self.sas.generate_token('b', 'music/\ud800', 'r', '2016-10-01T00:00:00Z')

        # Assert
        self.assertNotIsInstance(e.exception, AzureSigningError)
        self.assertIn('resource_name', str(e.exception))
        sign.assert_not_called()

    def test_generate_token_unencodable_header_values(self):
        for field in ['signed_ip', 'signed_identifier', 'signed_encryption_scope',
                      'cache_control', 'content_type']:
            with self.assertRaises(ValueError) as e:
                self._generate_blob_token(**{field: 'bad\udfff'})
            self.assertNotIsInstance(e.exception, AzureSigningError)
            self.assertIn(field, str(e.exception))

    def test_generate_token_does_not_log_secrets(self):
        # Act
        with self.assertLogs('storagesas.blob.sharedaccesssignature', level='DEBUG') as logs:
            token = self._generate_blob_token()

        # Assert
        output = '\n'.join(logs.output)
        self.assertIn('/blob/contosostorage/music/music.mp3', output)
        self.assertNotIn(self.account_key, output)
        self.assertNotIn(self.parse_token(token)['sig'], output)

    # --Test cases for the resource helpers ------------------------------------
    def test_generate_blob(self):
        # Act
        token = self.sas.generate_blob(
            'music',
            'music.mp3',
            permission=BlobPermissions.READ,
            expiry='2016-10-01T00:00:00Z',
        )

        # Assert
        self.assertEqual(token, self._generate_blob_token())

    def test_generate_blob_with_snapshot(self):
        # Act
        token = self.sas.generate_blob(
            'music',
            'music.mp3',
            permission=BlobPermissions.READ + BlobPermissions.DELETE,
            expiry='2016-10-01T00:00:00Z',
            snapshot='2016-09-15T00:00:00.0000000Z',
        )

        # Assert
        fields = self.parse_token(token)
        self.assertEqual(fields['sp'], 'rd')
        self.assertEqual(fields['sst'], '2016-09-15T00:00:00.0000000Z')
        self.assertQueryFields(token, ['sp', 'sv', 'st', 'se', 'sr', 'sst', 'sig'])

    def test_generate_container(self):
        # Act
        token = self.sas.generate_container(
            'photos',
            permission=ContainerPermissions.LIST | ContainerPermissions.READ,
            expiry='2016-10-01T00:00:00Z',
            start=datetime(2016, 9, 1, 8, 30),
            protocol='http,https',
        )

        # Assert
        self.assertEqual(
            token,
            'sp=rl&sv=' + X_MS_VERSION +
            '&st=2016-09-01T08%3A30%3A00Z&se=2016-10-01T00%3A00%3A00Z&sr=c&spr=https%2Chttp'
            '&sig=JenhakCsQBLteQabnaS8pZfQqEZb%2F6fS9NvUUZDwZFI%3D')
        self.assertEqual(self.parse_token(token)['sig'], _CONTAINER_HELPER_SIG)

    def test_generate_directory(self):
        # Arrange
        container_name = self.get_resource_name('container')

        # Act
        token = self.sas.generate_directory(
            container_name,
            'music',
            permission=DirectoryPermissions.READ + DirectoryPermissions.MOVE,
            expiry='2016-10-01T00:00:00Z',
            id='readpolicy',
        )

        # Assert
        fields = self.parse_token(token)
        self.assertEqual(fields['sr'], 'd')
        self.assertEqual(fields['sp'], 'rm')
        self.assertEqual(fields['si'], 'readpolicy')

    def test_generate_blob_requires_names(self):
        with self.assertRaises(ValueError):
            self.sas.generate_blob(None, 'music.mp3', permission='r', expiry='2016-10-01T00:00:00Z')
        with self.assertRaises(ValueError):
            self.sas.generate_blob('music', None, permission='r', expiry='2016-10-01T00:00:00Z')
        with self.assertRaises(ValueError):
            self.sas.generate_blob('music', 'music.mp3', permission='r')


# ------------------------------------------------------------------------------
if __name__ == '__main__':
    unittest.main()
