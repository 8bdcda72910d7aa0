import click
from rich.markup import escape

from publish_kit.config import NETWORKS
from publish_kit.core import (
    ensure_network,
    ensure_deployment_path,
    get_deployment_path_for_network,
    get_explorer_link_prefix,
    load_connections,
)
from publish_kit.sources import load_and_check_required_sources
from publish_kit.ledger import OwnerActionLedger
from publish_kit.cli.style import (
    print_status, print_table, parameter_notice, confirm_action, symbol_map
)


def _mask(value):
    if not value:
        return "(not set)"
    if len(value) < 12:
        return "******"
    return value[:6] + "..." + value[-4:]


def _resolve_deployment_path(network, deployment_path, use_ovm):
    ensure_network(network)
    if not deployment_path:
        deployment_path = get_deployment_path_for_network(network, use_ovm=use_ovm)
    ensure_deployment_path(deployment_path)
    return deployment_path


@click.group()
def cli():
    """Contract publishing helpers"""
    pass


@click.command()
@click.option("--network", default="goerli", type=str, help=f"Network to use, one of {', '.join(NETWORKS)}.")
@click.option("--use-fork", is_flag=True, help="Use a local fork of the network.")
@click.option("--use-ovm", is_flag=True, help="Target the OVM variant of the network.")
def connections(network, use_fork, use_ovm):
    """Show the resolved RPC and explorer endpoints for a network."""
    ensure_network(network)
    conn = load_connections(network, use_fork=use_fork, use_ovm=use_ovm)

    rows = [
        ("Network", network + (" (ovm)" if use_ovm else "")),
        ("Provider", conn.provider_url),
        ("Private key", _mask(conn.private_key)),
        ("Etherscan API", conn.etherscan_url),
        ("Explorer", conn.explorer_link_prefix),
    ]
    print_table(["Field", "Value"], rows, title="Connection Info")


@click.command()
@click.option("--network", default="goerli", type=str, help="Network to load.")
@click.option("--deployment-path", default=None, type=click.Path(), help="Deployment folder (defaults to the network's folder).")
@click.option("--use-ovm", is_flag=True, help="Use the OVM deployment folder.")
@click.option("--fresh-deploy", is_flag=True, help="Ignore previously deployed targets and sources.")
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt.")
def check(network, deployment_path, use_ovm, fresh_deploy, yes):
    """Load and validate every required file of a deployment folder."""
    deployment_path = _resolve_deployment_path(network, deployment_path, use_ovm)

    parameter_notice({
        "Network": network,
        "Deployment path": deployment_path,
        "OVM": "yes" if use_ovm else "no",
        "Fresh deploy": "yes" if fresh_deploy else "no",
    })
    if not yes:
        confirm_action("Proceed? (y/n) ")

    sources = load_and_check_required_sources(deployment_path, network, fresh_deploy=fresh_deploy)

    rows = [
        ("Contracts in config", len(sources.config)),
        ("Synths", len(sources.synths)),
        ("Feeds", len(sources.feeds)),
        ("Futures markets", len(sources.futures_markets)),
        ("Deployed targets", len(sources.deployment["targets"])),
        ("Owner actions", len(sources.owner_actions)),
    ]
    print_table(["Source", "Entries"], rows, title=f"{network} deployment")
    print_status(f"Sources OK {symbol_map['arrow']} {escape(deployment_path)}", level="success")


@click.command("owner-actions")
@click.option("--network", default="goerli", type=str, help="Network to load.")
@click.option("--deployment-path", default=None, type=click.Path(), help="Deployment folder (defaults to the network's folder).")
@click.option("--use-ovm", is_flag=True, help="Use the OVM deployment folder.")
@click.option("--all", "show_all", is_flag=True, help="Include completed actions.")
def owner_actions(network, deployment_path, use_ovm, show_all):
    """List owner actions waiting to be executed."""
    deployment_path = _resolve_deployment_path(network, deployment_path, use_ovm)
    sources = load_and_check_required_sources(deployment_path, network)
    ledger = OwnerActionLedger.from_sources(sources, get_explorer_link_prefix(network, use_ovm))

    actions = ledger.owner_actions if show_all else ledger.pending()
    if not actions:
        print_status("No pending owner actions.", level="success")
        return

    rows = [
        (key, entry["action"], entry["target"], "yes" if entry.get("complete") else "no", entry["link"])
        for key, entry in actions.items()
    ]
    print_table(["Key", "Action", "Target", "Complete", "Link"], rows, title="Owner Actions")


cli.add_command(connections)
cli.add_command(check)
cli.add_command(owner_actions)

if __name__ == "__main__":
    cli()
