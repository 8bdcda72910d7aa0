"""
Error kinds raised by the publishing helpers.

All of them are click exceptions so the CLI reports them as a single
``Error: ...`` line and exits with status 1.
"""

import click


class PublishError(click.ClickException):
    """Base class for every fatal publishing error."""


class InvalidNetworkError(PublishError):
    def __init__(self, network, networks):
        self.network = network
        self.networks = list(networks)
        super().__init__(
            f'Invalid network name of "{network}" supplied. Must be one of {", ".join(self.networks)}.'
        )


class InvalidDeploymentPathError(PublishError):
    def __init__(self, deployment_path, config_filename):
        self.deployment_path = deployment_path
        super().__init__(
            f"Invalid deployment path {deployment_path}. "
            f"Please provide a folder with a compatible {config_filename}"
        )


class MissingConfigurationError(PublishError):
    pass


class NotConfirmedError(PublishError):
    def __init__(self, message="Not confirmed"):
        super().__init__(message)


class MissingAddressError(PublishError):
    """A contract name could not be resolved to a deployed address."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Missing address: {name}")
