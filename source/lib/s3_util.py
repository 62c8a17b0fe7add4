######################################################################################################################
#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.                                                #
#                                                                                                                    #
#  Licensed under the Apache License, Version 2.0 (the "License"). You may not use this file except in compliance    #
#  with the License. A copy of the License is located at                                                             #
#                                                                                                                    #
#      http://www.apache.org/licenses/LICENSE-2.0                                                                    #
#                                                                                                                    #
#  or in the "license" file accompanying this file. This file is distributed on an "AS IS" BASIS, WITHOUT WARRANTIES #
#  OR CONDITIONS OF ANY KIND, express or implied. See the License for the specific language governing permissions    #
#  and limitations under the License.                                                                                #
######################################################################################################################
#!/bin/python

from botocore.exceptions import BotoCoreError, ClientError
from lib.boto3_util import create_client

NOT_FOUND_ERROR_CODES = {'NoSuchKey', 'NotFound', '404'}


class StorageOperationError(Exception):
    """
    Raised when a call to S3 fails. The message keeps the underlying
    error text; the original exception is chained as __cause__.
    """

    def __init__(self, operation, bucket, key, error):
        self.operation = operation
        self.bucket = bucket
        self.key = key
        self.error_code = get_error_code(error)
        super().__init__("%s of s3://%s/%s failed: %s" % (operation, bucket, key, error))

    @property
    def not_found(self):
        return self.error_code in NOT_FOUND_ERROR_CODES


def get_error_code(error):
    if isinstance(error, ClientError):
        return str(error.response.get('Error', {}).get('Code', ''))
    return None


class S3(object):
    def __init__(self, log, s3_client=None):
        self.log = log
        self.s3_client = s3_client if s3_client is not None else create_client('s3')

    def copy_object(self, source_bucket, source_key, dest_bucket, dest_key):
        try:
            response = self.s3_client.copy_object(
                CopySource={'Bucket': source_bucket, 'Key': source_key},
                Bucket=dest_bucket,
                Key=dest_key
            )
            self.log.debug("[s3_util: copy_object] response: \n%s" % response)
            return response
        except (ClientError, BotoCoreError) as e:
            self.log.error("[s3_util: copy_object] Error to copy file %s from bucket %s to %s in bucket %s."
                           %(source_key, source_bucket, dest_key, dest_bucket))
            self.log.error(e)
            raise StorageOperationError('copy', source_bucket, source_key, e) from e

    def delete_object(self, bucket_name, key_name):
        try:
            response = self.s3_client.delete_object(Bucket=bucket_name, Key=key_name)
            self.log.debug("[s3_util: delete_object] response: \n%s" % response)
            return response
        except (ClientError, BotoCoreError) as e:
            self.log.error("[s3_util: delete_object] Error to delete file %s from bucket %s."
                           %(key_name, bucket_name))
            self.log.error(e)
            raise StorageOperationError('delete', bucket_name, key_name, e) from e

