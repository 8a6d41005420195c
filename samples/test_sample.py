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

from samples.blob import BlobSasSamples
from storagesas.common import CloudStorageAccount
import tests.settings_fake as settings


class SampleTest(unittest.TestCase):
    def setUp(self):
        super(SampleTest, self).setUp()
        self.account = CloudStorageAccount(account_name=settings.STORAGE_ACCOUNT_NAME,
                                           account_key=settings.STORAGE_ACCOUNT_KEY)

    def test_blob_sas_samples(self):
        blob = BlobSasSamples(self.account)
        urls = blob.run_all_samples()

        self.assertEqual(len(urls), 4)
        for url in urls:
            self.assertTrue(url.startswith('https://storagename.blob.core.windows.net/mycontainer'))
            self.assertIn('&sig=', url)


# ------------------------------------------------------------------------------
if __name__ == '__main__':
    unittest.main()
