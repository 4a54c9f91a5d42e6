"""
Unit tests for the declarative model mapping.
"""
from flexhub.models import Base, SiteBaseModel, SiteFeature


class TestSiteScopedModels:

    def test_site_feature_maps_site_id(self):
        column = SiteFeature.__table__.c.site_id

        assert not column.nullable
        assert [fk.target_fullname for fk in column.foreign_keys] == ["sites.id"]
        assert next(iter(column.foreign_keys)).ondelete == "CASCADE"

    def test_every_site_scoped_table_references_sites(self):
        scoped = [
            mapper.class_
            for mapper in Base.registry.mappers
            if issubclass(mapper.class_, SiteBaseModel)
        ]

        assert scoped
        for model in scoped:
            targets = {fk.target_fullname for fk in model.__table__.c.site_id.foreign_keys}
            assert targets == {"sites.id"}, model.__name__
