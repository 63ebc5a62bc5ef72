#!/usr/bin/env python3
"""
Test suite for the AWS providers

Exercises the Route53 and ELB providers against mocked boto3 clients,
including pagination and the translation of botocore errors.
"""

import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

from botocore.exceptions import (
    ClientError,
    EndpointConnectionError,
    NoCredentialsError,
)

from dns_alias_manager.core.directory import DirectoryClient
from dns_alias_manager.core.record_manager import AliasMutator
from dns_alias_manager.core.models import (
    AliasRecord,
    ChangeAction,
    ChangeState,
    Zone,
)
from dns_alias_manager.errors import (
    AuthError,
    ChangeNotFound,
    LoadBalancerNotFound,
    RecordNotFound,
    TransportError,
    ZoneNotFound,
)
from dns_alias_manager.providers.aws_client import classify_aws_error, create_client
from dns_alias_manager.providers.elb_provider import ELBProvider
from dns_alias_manager.providers.route53_provider import Route53Provider

ZONE_PAGES = [
    {
        "HostedZones": [
            {"Id": "/hostedzone/ZID12341", "Name": "example1.com."},
            {"Id": "/hostedzone/ZID12342", "Name": "example2.com."},
        ],
        "IsTruncated": True,
    },
    {
        "HostedZones": [{"Id": "/hostedzone/ZID12343", "Name": "example3.com."}],
        "IsTruncated": False,
    },
]

RECORD_PAGES = [
    {
        "ResourceRecordSets": [
            {"Name": "example1.com.", "Type": "NS", "ResourceRecords": [{"Value": "ns-1.awsdns-1.com."}]},
            {
                "Name": "test1.example1.com.",
                "Type": "A",
                "AliasTarget": {
                    "DNSName": "dsdsdf.us-east-1.elb.amazonaws.com",
                    "HostedZoneId": "Z2HXXXXXXXXXXX",
                    "EvaluateTargetHealth": True,
                },
            },
            {
                "Name": "test2.example1.com.",
                "Type": "A",
                "AliasTarget": {
                    "DNSName": "kjskjk.us-east-1.elb.amazonaws.com",
                    "HostedZoneId": "Z2IXXXXXXXXXXX",
                    "EvaluateTargetHealth": True,
                },
            },
        ],
        "IsTruncated": True,
    },
    {
        "ResourceRecordSets": [
            {"Name": "plain.example1.com.", "Type": "A", "TTL": 300, "ResourceRecords": [{"Value": "10.0.0.1"}]},
            {
                "Name": "test3.example1.com.",
                "Type": "A",
                "AliasTarget": {
                    "DNSName": "jdlkjs.us-east-1.elb.amazonaws.com",
                    "HostedZoneId": "Z2FXXXXXXXXXXX",
                    "EvaluateTargetHealth": False,
                },
            },
        ],
        "IsTruncated": False,
    },
]

LB_PAGES = [
    {
        "LoadBalancerDescriptions": [
            {
                "DNSName": "ab4xxxxxxxxxxxxxxxxxxxxxxxxxxxxx-xxxxxxxxx.us-east-1.elb.amazonaws.com",
                "CanonicalHostedZoneNameID": "Z3DXXXXXXXXXXX",
            },
            {
                "DNSName": "afexxxxxxxxxxxxxxxxxxxxxxxxxxxxx-xxxxxxxxx.us-east-1.elb.amazonaws.com",
                "CanonicalHostedZoneNameID": "Z2HXXXXXXXXXXX",
            },
        ],
        "NextMarker": "marker",
    },
    {
        "LoadBalancerDescriptions": [
            {
                "DNSName": "a2bxxxxxxxxxxxxxxxxxxxxxxxxxxxxx-xxxxxxxxx.us-east-1.elb.amazonaws.com",
                "CanonicalHostedZoneNameID": "Z8IXXXXXXXXXXX",
            },
        ],
    },
]


def client_error(code: str, operation: str = "GetChange") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": f"{code} raised"}}, operation)


def paginated_client(pages_by_operation):
    """Build a mock boto3 client whose paginators return the given pages."""
    client = MagicMock()
    consumed = {name: 0 for name in pages_by_operation}

    def get_paginator(name):
        def paginate(**kwargs):
            for page in pages_by_operation[name]:
                consumed[name] += 1
                yield page

        paginator = MagicMock()
        paginator.paginate.side_effect = paginate
        return paginator

    client.get_paginator.side_effect = get_paginator
    client.consumed = consumed
    return client


def failing_client(exc):
    client = MagicMock()
    client.get_paginator.return_value.paginate.side_effect = exc
    return client


class TestRoute53Listings(unittest.TestCase):
    """Test the Route53 provider listings."""

    def setUp(self):
        """Set up test fixtures."""
        self.client = paginated_client(
            {"list_hosted_zones": ZONE_PAGES, "list_resource_record_sets": RECORD_PAGES}
        )
        self.provider = Route53Provider(client=self.client)
        self.directory = DirectoryClient(self.provider, self.provider)

    def test_list_zones_reads_every_page(self):
        """Test that all zone pages are listed."""
        zones = self.directory.list_zones()

        self.assertEqual(
            zones,
            [
                Zone(id="/hostedzone/ZID12341", name="example1.com."),
                Zone(id="/hostedzone/ZID12342", name="example2.com."),
                Zone(id="/hostedzone/ZID12343", name="example3.com."),
            ],
        )
        self.client.get_paginator.assert_called_with("list_hosted_zones")

    def test_find_zone_with_and_without_trailing_dot(self):
        """Test zone lookup ignores the trailing dot."""
        for name in ["example2.com.", "example2.com", "EXAMPLE2.com"]:
            with self.subTest(name=name):
                zone = self.directory.find_zone(name)
                self.assertEqual(zone.id, "/hostedzone/ZID12342")

    def test_find_zone_not_found_after_last_page(self):
        """Test that a missing zone is reported after the final page."""
        with self.assertRaises(ZoneNotFound):
            self.directory.find_zone("example-notfound.com")
        self.assertEqual(self.client.consumed["list_hosted_zones"], len(ZONE_PAGES))

    def test_record_pages_only_contain_alias_a_records(self):
        """Test that non-alias record sets are skipped."""
        pages = list(self.provider.iter_record_pages("/hostedzone/ZID12341"))

        names = [record.name for page in pages for record in page]
        self.assertEqual(
            names, ["test1.example1.com.", "test2.example1.com.", "test3.example1.com."]
        )

    def test_find_record_alias_forms(self):
        """Test record lookup for every alias form."""
        zone = Zone(id="/hostedzone/ZID12341", name="example1.com.")

        for alias in ["test2", "test2.example1.com.", "test2.example1.com"]:
            with self.subTest(alias=alias):
                record = self.directory.find_record(zone, alias)
                self.assertEqual(record.name, "test2.example1.com.")
                self.assertEqual(record.target_dns_name, "kjskjk.us-east-1.elb.amazonaws.com")
                self.assertEqual(record.target_hosted_zone_id, "Z2IXXXXXXXXXXX")

    def test_find_record_on_last_page(self):
        """Test that records on the last page are found with their health flag."""
        zone = Zone(id="/hostedzone/ZID12341", name="example1.com.")

        record = self.directory.find_record(zone, "test3")

        self.assertFalse(record.evaluate_target_health)

    def test_find_record_not_found(self):
        """Test that a missing record is reported after the final page."""
        zone = Zone(id="/hostedzone/ZID12341", name="example1.com.")

        with self.assertRaises(RecordNotFound):
            self.directory.find_record(zone, "missing")
        self.assertEqual(self.client.consumed["list_resource_record_sets"], len(RECORD_PAGES))


class TestWildcardAliases(unittest.TestCase):
    """Test wildcard aliases listed with Route53's octal escapes."""

    def setUp(self):
        """Set up test fixtures."""
        self.client = paginated_client(
            {
                "list_resource_record_sets": [
                    {
                        "ResourceRecordSets": [
                            {
                                "Name": "\\052.example.com.",
                                "Type": "A",
                                "AliasTarget": {
                                    "HostedZoneId": "ZLB",
                                    "DNSName": "lb.amazonaws.com.",
                                    "EvaluateTargetHealth": True,
                                },
                            }
                        ]
                    }
                ]
            }
        )
        self.client.change_resource_record_sets.return_value = {
            "ChangeInfo": {"Id": "/change/C22222", "Status": "PENDING"}
        }
        self.provider = Route53Provider(client=self.client)
        self.directory = DirectoryClient(self.provider, self.provider)
        self.zone = Zone(id="/hostedzone/Z1", name="example.com.")

    def test_listed_name_is_decoded(self):
        """Test that the escaped wildcard label is listed as '*'."""
        pages = list(self.provider.iter_record_pages(self.zone.id))

        self.assertEqual(pages[0][0].name, "*.example.com.")

    def test_find_wildcard_record(self):
        """Test that a wildcard alias can be looked up after creation."""
        for alias in ["*", "*.example.com", "*.example.com."]:
            with self.subTest(alias=alias):
                record = self.directory.find_record(self.zone, alias)
                self.assertEqual(record.target_dns_name, "lb.amazonaws.com.")

    def test_remove_wildcard_alias(self):
        """Test that removing a wildcard alias deletes the listed record."""
        AliasMutator(self.directory, self.provider).remove_alias(self.zone, "*")

        batch = self.client.change_resource_record_sets.call_args.kwargs["ChangeBatch"]
        self.assertEqual(batch["Changes"][0]["Action"], "DELETE")
        self.assertEqual(batch["Changes"][0]["ResourceRecordSet"]["Name"], "*.example.com.")


class TestRoute53Changes(unittest.TestCase):
    """Test Route53 change submission and status queries."""

    def setUp(self):
        """Set up test fixtures."""
        self.client = MagicMock()
        self.client.change_resource_record_sets.return_value = {
            "ChangeInfo": {
                "Id": "/change/C11111",
                "Status": "PENDING",
                "SubmittedAt": datetime(2016, 5, 1, tzinfo=timezone.utc),
            }
        }
        self.provider = Route53Provider(client=self.client)

    def test_upsert_change_batch(self):
        """Test the change batch sent for an upsert."""
        record = AliasRecord(
            name="test.example2.com.",
            target_dns_name="lb.amazonaws.com",
            target_hosted_zone_id="ZLB",
            evaluate_target_health=True,
        )

        status = self.provider.change_alias_record("/hostedzone/Z2", ChangeAction.UPSERT, record)

        self.assertEqual(status.id, "/change/C11111")
        self.assertEqual(status.state, ChangeState.PENDING)
        self.client.change_resource_record_sets.assert_called_once_with(
            HostedZoneId="/hostedzone/Z2",
            ChangeBatch={
                "Changes": [
                    {
                        "Action": "UPSERT",
                        "ResourceRecordSet": {
                            "Name": "test.example2.com.",
                            "Type": "A",
                            "AliasTarget": {
                                "HostedZoneId": "ZLB",
                                "DNSName": "lb.amazonaws.com",
                                "EvaluateTargetHealth": True,
                            },
                        },
                    }
                ]
            },
        )

    def test_delete_with_comment(self):
        """Test that a comment is attached to the change batch."""
        record = AliasRecord("test.example2.com.", "lb.amazonaws.com", "ZLB", False)

        self.provider.change_alias_record(
            "/hostedzone/Z2", ChangeAction.DELETE, record, comment="cleanup"
        )

        batch = self.client.change_resource_record_sets.call_args.kwargs["ChangeBatch"]
        self.assertEqual(batch["Comment"], "cleanup")
        self.assertEqual(batch["Changes"][0]["Action"], "DELETE")
        self.assertFalse(batch["Changes"][0]["ResourceRecordSet"]["AliasTarget"]["EvaluateTargetHealth"])

    def test_get_change_in_sync(self):
        """Test status mapping of an INSYNC change."""
        self.client.get_change.return_value = {
            "ChangeInfo": {"Id": "/change/C11111", "Status": "INSYNC", "Comment": "done"}
        }

        status = self.provider.get_change("/change/C11111")

        self.assertTrue(status.is_in_sync)
        self.assertEqual(status.comment, "done")
        self.client.get_change.assert_called_once_with(Id="/change/C11111")

    def test_get_change_not_found(self):
        """Test that NoSuchChange becomes ChangeNotFound."""
        self.client.get_change.side_effect = client_error("NoSuchChange")

        with self.assertRaises(ChangeNotFound) as ctx:
            self.provider.get_change("/change/CUNKNOWN")
        self.assertEqual(ctx.exception.name, "/change/CUNKNOWN")

    def test_change_failure_is_transport_error(self):
        """Test that a rejected change batch surfaces as TransportError."""
        self.client.change_resource_record_sets.side_effect = client_error(
            "InvalidChangeBatch", "ChangeResourceRecordSets"
        )
        record = AliasRecord("test.example2.com.", "lb.amazonaws.com", "ZLB")

        with self.assertRaises(TransportError):
            self.provider.change_alias_record("/hostedzone/Z2", ChangeAction.DELETE, record)


class TestELBProvider(unittest.TestCase):
    """Test the ELB provider."""

    def setUp(self):
        """Set up test fixtures."""
        self.client = paginated_client({"describe_load_balancers": LB_PAGES})
        self.directory = DirectoryClient(None, None, ELBProvider(client=self.client))

    def test_list_load_balancers(self):
        """Test that all load balancer pages are listed."""
        lbs = self.directory.list_load_balancers()

        self.assertEqual(len(lbs), 3)
        self.assertEqual(lbs[0].hosted_zone_id, "Z3DXXXXXXXXXXX")
        self.assertEqual(lbs[2].dns_name, "a2bxxxxxxxxxxxxxxxxxxxxxxxxxxxxx-xxxxxxxxx.us-east-1.elb.amazonaws.com")

    def test_find_load_balancer(self):
        """Test case-insensitive load balancer lookup."""
        lb = self.directory.find_load_balancer(
            "AFExxxxxxxxxxxxxxxxxxxxxxxxxxxxx-xxxxxxxxx.us-east-1.elb.amazonaws.com"
        )
        self.assertEqual(lb.hosted_zone_id, "Z2HXXXXXXXXXXX")

    def test_find_load_balancer_not_found(self):
        """Test that a missing load balancer is reported after the final page."""
        with self.assertRaises(LoadBalancerNotFound):
            self.directory.find_load_balancer(
                "abnxxxxxxxxxxxxxxxxxxxxxxxxxxxxx-xxxxxxxxx.us-east-1.elb.amazonaws.com"
            )
        self.assertEqual(self.client.consumed["describe_load_balancers"], len(LB_PAGES))


class TestCredentialErrors(unittest.TestCase):
    """Test that credential failures surface as AuthError on every listing."""

    def test_listings_with_bad_credentials(self):
        """Test that a missing credential chain raises AuthError."""
        route53 = Route53Provider(client=failing_client(NoCredentialsError()))
        elb = ELBProvider(client=failing_client(NoCredentialsError()))
        directory = DirectoryClient(route53, route53, elb)
        zone = Zone(id="/hostedzone/Z1", name="example1.com.")

        calls = {
            "list_zones": directory.list_zones,
            "find_zone": lambda: directory.find_zone("example1.com"),
            "list_load_balancers": directory.list_load_balancers,
            "find_load_balancer": lambda: directory.find_load_balancer("lb.amazonaws.com"),
            "find_record": lambda: directory.find_record(zone, "test"),
        }
        for name, call in calls.items():
            with self.subTest(call=name):
                with self.assertRaises(AuthError) as ctx:
                    call()
                self.assertIsInstance(ctx.exception.cause, NoCredentialsError)

    def test_rejected_token_is_auth_error(self):
        """Test that a rejected access key raises AuthError."""
        client = failing_client(client_error("InvalidClientTokenId", "ListHostedZones"))
        directory = DirectoryClient(Route53Provider(client=client), None)

        with self.assertRaises(AuthError):
            directory.list_zones()

    def test_connection_failure_is_transport_error(self):
        """Test that network failures raise TransportError."""
        exc = EndpointConnectionError(endpoint_url="https://route53.amazonaws.com")
        directory = DirectoryClient(Route53Provider(client=failing_client(exc)), None)

        with self.assertRaises(TransportError) as ctx:
            directory.list_zones()
        self.assertEqual(ctx.exception.operation, "ListHostedZones")

    def test_classify_unknown_client_error(self):
        """Test that unclassified client errors become TransportError."""
        error = classify_aws_error("GetChange", client_error("Throttling"))
        self.assertIsInstance(error, TransportError)


class TestCreateClient(unittest.TestCase):
    """Test boto3 client construction."""

    @patch("dns_alias_manager.providers.aws_client.boto3.Session")
    def test_client_does_not_retry_by_default(self, mock_session):
        """Test that clients are built without retries and with request logging."""
        session = mock_session.return_value
        client = create_client("route53", {"region": "eu-west-1", "profile": "ops"})

        mock_session.assert_called_once_with(profile_name="ops", region_name="eu-west-1")
        service, = session.client.call_args.args
        client_config = session.client.call_args.kwargs["config"]
        self.assertEqual(service, "route53")
        self.assertEqual(client_config.retries, {"mode": "standard", "max_attempts": 1})
        client.meta.events.register.assert_called_once()
        self.assertEqual(client.meta.events.register.call_args.args[0], "before-call")


if __name__ == "__main__":
    unittest.main()
