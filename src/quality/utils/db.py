from protean.domain import Domain
from sqlalchemy import create_engine


def setup_db(domain: Domain):
    """Create tables for every aggregate, entity and projection on SQL providers."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in ("sqlite", "postgresql"):
                engine = create_engine(provider.conn_info["database_uri"])

                # Touching the DAO registers each model's table on the provider metadata
                for registry in (domain.registry.aggregates, domain.registry.entities, domain.registry.projections):
                    for _, record in registry.items():
                        if record.cls.meta_.provider == provider.name:
                            domain.repository_for(record.cls)._dao  # noqa: B018

                if hasattr(domain, "_outbox_repos") and provider.name in domain._outbox_repos:
                    domain._outbox_repos[provider.name]._dao  # noqa: B018

                provider._metadata.create_all(engine)


def drop_db(domain: Domain):
    """Drop every table created by `setup_db`."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in ("sqlite", "postgresql"):
                engine = create_engine(provider.conn_info["database_uri"])
                provider._metadata.drop_all(engine)
