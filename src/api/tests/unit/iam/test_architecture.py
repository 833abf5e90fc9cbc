"""Architecture tests for the IAM bounded context.

These tests enforce DDD layering inside IAM: the domain is pure, the
application layer depends on ports rather than repositories, and HTTP
concerns stay in presentation and dependencies.
"""

from pytest_archon import archrule


class TestIAMDomainLayerBoundaries:
    """Tests that the IAM domain layer has no forbidden dependencies."""

    def test_domain_does_not_import_application(self):
        """Aggregates and events should be usable without services."""
        (
            archrule("iam_domain_no_application")
            .match("iam.domain*")
            .should_not_import("iam.application*")
            .check("iam")
        )

    def test_domain_does_not_import_infrastructure(self):
        """The domain must not know about ORM models or repositories."""
        (
            archrule("iam_domain_no_infrastructure")
            .match("iam.domain*")
            .should_not_import("iam.infrastructure*", "infrastructure*")
            .check("iam")
        )

    def test_domain_does_not_import_ports(self):
        """Aggregates raise their own errors; ports depend on the domain."""
        (
            archrule("iam_domain_no_ports")
            .match("iam.domain*")
            .should_not_import("iam.ports*")
            .check("iam")
        )

    def test_domain_does_not_import_frameworks(self):
        """Domain objects should be framework-agnostic."""
        (
            archrule("iam_domain_no_frameworks")
            .match("iam.domain*")
            .should_not_import("fastapi*", "starlette*", "sqlalchemy*")
            .check("iam")
        )


class TestIAMPortsLayerBoundaries:
    """Tests that IAM ports only describe interfaces."""

    def test_ports_does_not_import_infrastructure(self):
        """Ports should not depend on repository implementations."""
        (
            archrule("iam_ports_no_infrastructure")
            .match("iam.ports*")
            .should_not_import("iam.infrastructure*")
            .check("iam")
        )

    def test_ports_does_not_import_application(self):
        """Ports are used by the application layer, not the other way around."""
        (
            archrule("iam_ports_no_application")
            .match("iam.ports*")
            .should_not_import("iam.application*")
            .check("iam")
        )


class TestIAMApplicationLayerBoundaries:
    """Tests that IAM application services depend on ports."""

    def test_application_does_not_import_infrastructure(self):
        """Services and listeners receive repositories through ports.

        Listeners that open their own unit of work are handed repository
        factories rather than importing concrete repositories.
        """
        (
            archrule("iam_application_no_infrastructure")
            .match("iam.application*")
            .should_not_import("iam.infrastructure*")
            .check("iam")
        )

    def test_application_does_not_import_presentation(self):
        (
            archrule("iam_application_no_presentation")
            .match("iam.application*")
            .should_not_import("iam.presentation*", "iam.dependencies*")
            .check("iam")
        )

    def test_application_does_not_import_fastapi(self):
        """The access gate and services must not depend on the web framework."""
        (
            archrule("iam_application_no_fastapi")
            .match("iam.application*")
            .should_not_import("fastapi*", "starlette*")
            .check("iam")
        )


class TestIAMInfrastructureLayerBoundaries:
    """Tests that IAM infrastructure has appropriate dependencies."""

    def test_infrastructure_does_not_import_application(self):
        """Repositories are used BY the application layer, not vice versa."""
        (
            archrule("iam_infrastructure_no_application")
            .match("iam.infrastructure*")
            .should_not_import("iam.application*", "iam.presentation*")
            .check("iam")
        )

    def test_infrastructure_can_import_domain_and_ports(self):
        """Repositories map ORM rows to aggregates and implement ports."""
        (
            archrule("iam_infrastructure_may_import_domain_ports")
            .match("iam.infrastructure*")
            .may_import("iam.domain*", "iam.ports*")
            .check("iam")
        )


class TestIAMAllowedDependencies:
    """Tests that IAM can import from its allowed dependencies.

    IAM is allowed to import from:
    - shared_kernel (event dispatch, observation context)
    - infrastructure (settings, database, logging)
    - Other IAM sub-packages (domain, ports, application, etc.)
    """

    def test_iam_may_import_shared_kernel(self):
        (
            archrule("iam_may_import_shared_kernel")
            .match("iam*")
            .may_import("shared_kernel*")
            .check("iam")
        )

    def test_iam_may_import_infrastructure(self):
        (
            archrule("iam_may_import_infrastructure")
            .match("iam*")
            .may_import("infrastructure*")
            .check("iam")
        )
