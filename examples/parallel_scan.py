"""
Example: a filtered parallel scan driven by ScanFilterSpec.

The base spec carries the filter; split_segments() hands each worker its
own copy, so no spec is shared between threads. Each worker pages through
its segment by feeding LastEvaluatedKey back as the exclusive start key.

Run against LocalStack or a real table named "Users".
"""

from concurrent.futures import ThreadPoolExecutor

import boto3

from dynspec import Attr, ConditionalOperator, ScanFilterSpec

client = boto3.client("dynamodb", region_name="us-east-1")

base = (
    ScanFilterSpec()
    .with_filter(Attr("status") == "ACTIVE", Attr("age") >= 18)
    .with_conditional_operator(ConditionalOperator.AND)
    # Items evaluated per page, not items returned
    .with_limit(100)
)


def scan_segment(spec: ScanFilterSpec) -> list[dict]:
    items = []
    while True:
        response = client.scan(**spec.validate().to_expression_kwargs("Users"))
        items.extend(response.get("Items", []))
        last_key = response.get("LastEvaluatedKey")
        if last_key is None:
            return items
        spec.with_exclusive_start_key(last_key)


with ThreadPoolExecutor(max_workers=4) as pool:
    results = pool.map(scan_segment, base.split_segments(4))

for segment, items in enumerate(results):
    print(f"Segment {segment}: {len(items)} matching users")


# Same filter, legacy request shape
print(base.to_scan_kwargs("Users"))
