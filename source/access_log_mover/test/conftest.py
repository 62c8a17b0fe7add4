###############################################################################
#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.    #
#                                                                             #
#  Licensed under the Apache License, Version 2.0 (the "License").            #
#  You may not use this file except in compliance with the License.
#  A copy of the License is located at                                        #
#                                                                             #
#      http://www.apache.org/licenses/LICENSE-2.0                             #
#                                                                             #
#  or in the "license" file accompanying this file. This file is distributed  #
#  on an "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, express #
#  or implied. See the License for the specific language governing permissions#
#  and limitations under the License.                                         #
###############################################################################

import boto3
import pytest
from os import environ
from moto import mock_aws


REGION = "us-east-1"
SOURCE_BUCKET_NAME = "test-cloudfront-logs"
TARGET_BUCKET_NAME = "test-partitioned-logs"
TARGET_KEY_PREFIX = "cloudfront/"

CLOUDFRONT_LOG_FILE_NAME = "E1234ABCD.2022-05-01-09.abcd1234.gz"
CLOUDFRONT_LOG_FILE_S3_KEY = "logs/raw/" + CLOUDFRONT_LOG_FILE_NAME
CLOUDFRONT_LOG_FILE_DEST_KEY = "cloudfront/2022/05/01/09/" + CLOUDFRONT_LOG_FILE_NAME
NON_LOG_FILE_S3_KEY = "some/random/file.txt"

# move_access_log reads its configuration when it is imported
environ['TARGET_BUCKET'] = TARGET_BUCKET_NAME
environ['TARGET_KEY_PREFIX'] = TARGET_KEY_PREFIX


@pytest.fixture(scope='module', autouse=True)
def test_aws_credentials_setup():
    """Mocked AWS Credentials for moto"""
    environ['AWS_ACCESS_KEY_ID'] = 'testing'
    environ['AWS_SECRET_ACCESS_KEY'] = 'testing'
    environ['AWS_SECURITY_TOKEN'] = 'testing'
    environ['AWS_SESSION_TOKEN'] = 'testing'
    environ['AWS_DEFAULT_REGION'] = 'us-east-1'
    environ['AWS_REGION'] = 'us-east-1'


@pytest.fixture(scope='module', autouse=True)
def test_environment_vars_setup():
    environ['LOG_LEVEL'] = 'INFO'


@pytest.fixture(scope='function')
def s3_client():
    with mock_aws():
        connection = boto3.client("s3", region_name=REGION)
        yield connection


@pytest.fixture(scope='function')
def s3_buckets_setup(s3_client):
    conn = s3_client
    conn.create_bucket(Bucket=SOURCE_BUCKET_NAME)
    conn.create_bucket(Bucket=TARGET_BUCKET_NAME)
    conn.put_object(Bucket=SOURCE_BUCKET_NAME, Key=CLOUDFRONT_LOG_FILE_S3_KEY, Body=b'log line')
    conn.put_object(Bucket=SOURCE_BUCKET_NAME, Key=NON_LOG_FILE_S3_KEY, Body=b'not a log')
    return conn


def make_object_created_event(bucket, key):
    return {
        "version": "0",
        "id": "17793124-05d4-b198-2fde-7ededc63b103",
        "detail-type": "Object Created",
        "source": "aws.s3",
        "account": "123456789012",
        "time": "2022-05-01T09:05:12Z",
        "region": REGION,
        "resources": ["arn:aws:s3:::%s" % bucket],
        "detail": {
            "version": "0",
            "bucket": {
                "name": bucket
            },
            "object": {
                "key": key,
                "size": 8,
                "etag": "b1946ac92492d2347c6235b4d2611184",
                "sequencer": "00617F08299329D189"
            },
            "request-id": "N4N7GDK58NMKJ12R",
            "requester": "123456789012",
            "source-ip-address": "1.2.3.4",
            "reason": "PutObject"
        }
    }


@pytest.fixture(scope='function')
def cloudfront_log_test_event_setup():
    return make_object_created_event(SOURCE_BUCKET_NAME, CLOUDFRONT_LOG_FILE_S3_KEY)


@pytest.fixture(scope='function')
def non_log_file_test_event_setup():
    return make_object_created_event(SOURCE_BUCKET_NAME, NON_LOG_FILE_S3_KEY)


@pytest.fixture(scope='function')
def target_bucket_test_event_setup():
    return make_object_created_event(TARGET_BUCKET_NAME, CLOUDFRONT_LOG_FILE_DEST_KEY)
