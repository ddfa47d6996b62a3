"""
Example: reading the result of a Cognito Sync UpdateRecords call.
"""

import boto3

from dynspec import ResultRecordSet

client = boto3.client("cognito-sync", region_name="us-east-1")

response = client.update_records(
    IdentityPoolId="us-east-1:00000000-0000-0000-0000-000000000000",
    IdentityId="us-east-1:11111111-1111-1111-1111-111111111111",
    DatasetName="preferences",
    SyncSessionToken="token-from-list-records",
    RecordPatches=[{"Op": "replace", "Key": "theme", "Value": "dark", "SyncCount": 3}],
)

result = ResultRecordSet.from_response(response)
for record in result.records:
    print(f"{record.key} = {record.value} (sync #{record.sync_count})")

print(result)
