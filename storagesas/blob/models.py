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
from ..common.sharedaccesssignature import ResourceType

# Permission letters accepted for each signed resource, in the order the
# service expects them in the 'sp' field.
_ACCESS_PERMISSIONS = {
    ResourceType.RESOURCE_BLOB: 'racwdxt',
    ResourceType.RESOURCE_CONTAINER: 'racwdxltf',
    ResourceType.RESOURCE_DIRECTORY: 'racwdlmeop',
}


class _Permissions(object):
    _ALPHABET = ''
    _NAMES = ()

    def __init__(self, _str=None, **kwargs):
        if not _str:
            _str = ''
        for letter, name in zip(self._ALPHABET, self._NAMES):
            setattr(self, name, kwargs.pop(name, False) or (letter in _str))
        if kwargs:
            raise TypeError('Unexpected permissions: {}'.format(', '.join(sorted(kwargs))))

    def __or__(self, other):
        return type(self)(_str=str(self) + str(other))

    def __add__(self, other):
        return type(self)(_str=str(self) + str(other))

    def __eq__(self, other):
        return type(self) is type(other) and str(self) == str(other)

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash((type(self), str(self)))

    def __str__(self):
        return ''.join([letter for letter, name in zip(self._ALPHABET, self._NAMES)
                        if getattr(self, name)])


class BlobPermissions(_Permissions):

    '''
    BlobPermissions class to be used with
    :func:`~storagesas.blob.sharedaccesssignature.BlobSharedAccessSignature.generate_blob`.

    :param bool read:
        Read the content, properties, metadata and block list. Use the blob as
        the source of a copy operation.
    :param bool add:
        Add a block to an append blob.
    :param bool create:
        Write a new blob, snapshot a blob, or copy a blob to a new blob.
    :param bool write:
        Create or write content, properties, metadata, or block list. Snapshot
        or lease the blob. Resize the blob (page blob only). Use the blob as the
        destination of a copy operation within the same account.
    :param bool delete:
        Delete the blob.
    :param bool delete_previous_version:
        Delete a previous version of the blob.
    :param bool tag:
        Read or write the tags of the blob.
    :param str _str:
        A string representing the permissions.
    '''
    _ALPHABET = _ACCESS_PERMISSIONS[ResourceType.RESOURCE_BLOB]
    _NAMES = ('read', 'add', 'create', 'write', 'delete', 'delete_previous_version', 'tag')


class ContainerPermissions(_Permissions):

    '''
    ContainerPermissions class to be used with
    :func:`~storagesas.blob.sharedaccesssignature.BlobSharedAccessSignature.generate_container`.

    :param bool read:
        Read the content, properties, metadata or block list of any blob in the
        container. Use any blob in the container as the source of a copy operation.
    :param bool add:
        Add a block to any append blob in the container.
    :param bool create:
        Write a new blob to the container, snapshot any blob in the container,
        or copy a blob to a new blob in the container.
    :param bool write:
        For any blob in the container, create or write content, properties,
        metadata, or block list. Snapshot or lease the blob. Resize the blob
        (page blob only). Use the blob as the destination of a copy operation
        within the same account. Note: You cannot grant permissions to read or
        write container properties or metadata, nor to lease a container, with
        a container SAS. Use an account SAS instead.
    :param bool delete:
        Delete any blob in the container. Note: You cannot grant permissions to
        delete a container with a container SAS. Use an account SAS instead.
    :param bool delete_previous_version:
        Delete a previous version of any blob in the container.
    :param bool list:
        List blobs in the container.
    :param bool tag:
        Read or write the tags of any blob in the container.
    :param bool filter_by_tags:
        Find blobs in the container by their tags.
    :param str _str:
        A string representing the permissions.
    '''
    _ALPHABET = _ACCESS_PERMISSIONS[ResourceType.RESOURCE_CONTAINER]
    _NAMES = ('read', 'add', 'create', 'write', 'delete', 'delete_previous_version',
              'list', 'tag', 'filter_by_tags')


class DirectoryPermissions(_Permissions):

    '''
    DirectoryPermissions class to be used with
    :func:`~storagesas.blob.sharedaccesssignature.BlobSharedAccessSignature.generate_directory`.
    Only applies to accounts with a hierarchical namespace.

    :param bool read:
        Read the content and properties of any blob under the directory.
    :param bool add:
        Append to any blob under the directory.
    :param bool create:
        Create any blob under the directory.
    :param bool write:
        Write the content and properties of any blob under the directory.
    :param bool delete:
        Delete any blob under the directory.
    :param bool list:
        List the paths under the directory.
    :param bool move:
        Move or rename a blob or directory under the directory.
    :param bool execute:
        Get the status of, and the access control list of, paths under the directory.
    :param bool ownership:
        Set the owner or owning group of paths under the directory.
    :param bool permissions:
        Set the permissions and access control list of paths under the directory.
    :param str _str:
        A string representing the permissions.
    '''
    _ALPHABET = _ACCESS_PERMISSIONS[ResourceType.RESOURCE_DIRECTORY]
    _NAMES = ('read', 'add', 'create', 'write', 'delete', 'list', 'move',
              'execute', 'ownership', 'permissions')


''' Read the content, properties, metadata and block list. Use the blob as the source of a copy operation. '''
BlobPermissions.READ = BlobPermissions(read=True)

''' Add a block to an append blob. '''
BlobPermissions.ADD = BlobPermissions(add=True)

''' Write a new blob, snapshot a blob, or copy a blob to a new blob. '''
BlobPermissions.CREATE = BlobPermissions(create=True)

'''
Create or write content, properties, metadata, or block list. Snapshot or lease
the blob. Resize the blob (page blob only). Use the blob as the destination of a
copy operation within the same account.
'''
BlobPermissions.WRITE = BlobPermissions(write=True)

''' Delete the blob. '''
BlobPermissions.DELETE = BlobPermissions(delete=True)

''' Delete a previous version of the blob. '''
BlobPermissions.DELETE_PREVIOUS_VERSION = BlobPermissions(delete_previous_version=True)

''' Read or write the tags of the blob. '''
BlobPermissions.TAG = BlobPermissions(tag=True)

'''
Read the content, properties, metadata or block list of any blob in the
container. Use any blob in the container as the source of a copy operation.
'''
ContainerPermissions.READ = ContainerPermissions(read=True)

''' Add a block to any append blob in the container. '''
ContainerPermissions.ADD = ContainerPermissions(add=True)

''' Write a new blob to the container. '''
ContainerPermissions.CREATE = ContainerPermissions(create=True)

'''
For any blob in the container, create or write content, properties,
metadata, or block list. Snapshot or lease the blob. Resize the blob
(page blob only). Use the blob as the destination of a copy operation
within the same account.
'''
ContainerPermissions.WRITE = ContainerPermissions(write=True)

''' Delete any blob in the container. '''
ContainerPermissions.DELETE = ContainerPermissions(delete=True)

''' Delete a previous version of any blob in the container. '''
ContainerPermissions.DELETE_PREVIOUS_VERSION = ContainerPermissions(delete_previous_version=True)

''' List blobs in the container. '''
ContainerPermissions.LIST = ContainerPermissions(list=True)

''' Read or write the tags of any blob in the container. '''
ContainerPermissions.TAG = ContainerPermissions(tag=True)

''' Find blobs in the container by their tags. '''
ContainerPermissions.FILTER_BY_TAGS = ContainerPermissions(filter_by_tags=True)

DirectoryPermissions.READ = DirectoryPermissions(read=True)
DirectoryPermissions.ADD = DirectoryPermissions(add=True)
DirectoryPermissions.CREATE = DirectoryPermissions(create=True)
DirectoryPermissions.WRITE = DirectoryPermissions(write=True)
DirectoryPermissions.DELETE = DirectoryPermissions(delete=True)
DirectoryPermissions.LIST = DirectoryPermissions(list=True)
DirectoryPermissions.MOVE = DirectoryPermissions(move=True)
DirectoryPermissions.EXECUTE = DirectoryPermissions(execute=True)
DirectoryPermissions.OWNERSHIP = DirectoryPermissions(ownership=True)
DirectoryPermissions.PERMISSIONS = DirectoryPermissions(permissions=True)
