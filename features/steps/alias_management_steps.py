"""
Step definitions for DNS Alias Manager scenarios.
"""

from behave import given, then, when

from dns_alias_manager.core.dns_manager import AliasManager, CreateParams, RemoveParams
from dns_alias_manager.core.models import ChangeState
from dns_alias_manager.utils.names import names_equal


def _provider(context):
    return context.alias_manager.dns_client.dns_provider


def _records(context, zone_id, name):
    return [r for r in _provider(context).records.get(zone_id, []) if names_equal(r.name, name)]


@given("the alias manager is configured with the mock provider")
def step_impl(context):
    """Configure the alias manager with the in-memory provider."""
    context.manager_config = {
        "default_provider": "mock",
        "dns_providers": {"mock": context.mock_config},
        "sync": context.sync_config,
    }
    context.alias_manager = AliasManager(context.manager_config)
    assert context.alias_manager.dns_client is not None


@given("changes take a long time to sync")
def step_impl(context):
    """Make changes stay PENDING for many polls."""
    _provider(context).polls_until_insync = 10_000


@given('the zone "{zone_id}" has an alias "{name}" for the load balancer')
def step_impl(context, zone_id, name):
    """Seed an existing alias record."""
    context.mock_config["records"] = [
        {
            "zone_id": zone_id,
            "name": name,
            "target_dns_name": context.lb_dns_name,
            "target_hosted_zone_id": context.lb_hosted_zone_id,
        }
    ]
    context.alias_manager = AliasManager(context.manager_config)


@when('I create the alias "{alias}" in zone "{zone}" for the load balancer')
def step_impl(context, alias, zone):
    """Run the create command."""
    context.result = context.alias_manager.create(
        CreateParams(alias=alias, zone_name=zone, elb_dns_name=context.lb_dns_name)
    )


@when('I create the alias "{alias}" in zone "{zone}" for the load balancer with a timeout of {timeout:g} seconds')
def step_impl(context, alias, zone, timeout):
    """Run the create command with a short timeout."""
    context.result = context.alias_manager.create(
        CreateParams(
            alias=alias, zone_name=zone, elb_dns_name=context.lb_dns_name, timeout=timeout
        )
    )


@when('I remove the alias "{alias}" from zone "{zone}"')
def step_impl(context, alias, zone):
    """Run the remove command."""
    context.result = context.alias_manager.remove(RemoveParams(alias=alias, zone_name=zone))


@then("the command should succeed")
def step_impl(context):
    """Verify the command succeeded."""
    assert context.result.success, f"Command failed: {context.result.error}"


@then('the command should fail with "{error_type}"')
def step_impl(context, error_type):
    """Verify the command failed with the given error."""
    assert not context.result.success
    assert context.result.error.__class__.__name__ == error_type, context.result.error


@then('the record "{name}" should point at the load balancer')
def step_impl(context, name):
    """Verify the stored alias target."""
    records = _records(context, "/hostedzone/Z2", name)
    assert len(records) == 1, records
    assert records[0].target_dns_name == context.lb_dns_name
    assert records[0].target_hosted_zone_id == context.lb_hosted_zone_id
    assert records[0].evaluate_target_health


@then('the zone "{zone_id}" should hold exactly one record named "{name}"')
def step_impl(context, zone_id, name):
    """Verify a record exists exactly once."""
    assert len(_records(context, zone_id, name)) == 1


@then('the zone "{zone_id}" should hold no record named "{name}"')
def step_impl(context, zone_id, name):
    """Verify a record is gone."""
    assert _records(context, zone_id, name) == []


@then("the change should be in sync")
def step_impl(context):
    """Verify the waiter saw the change reach INSYNC."""
    wait_result = context.result.wait_result
    assert wait_result.converged
    assert wait_result.status.state == ChangeState.INSYNC


@then('I should see "{text}"')
def step_impl(context, text):
    """Verify console output."""
    assert text in context.output.getvalue(), context.output.getvalue()


@then("no change should have been submitted")
def step_impl(context):
    """Verify that no mutation reached the provider."""
    assert not [c for c in _provider(context).calls if c.startswith("change:")]
