"""
Tests for the query resolution engine
"""

import threading
from unittest.mock import patch

import pytest

from kennel.graphql import (
    Engine,
    FieldSelection,
    MissingArgument,
    OperationKind,
    TypeMismatch,
    UnknownArgument,
    UnknownField,
    field,
    select,
)
from kennel.store import SEED_OWNERS, SEED_PETS, Collection


def query(engine, root, arguments=None, selection=(), **kwargs):
    return engine.execute("query", root, arguments, selection, **kwargs)


class TestRootFields:
    def test_owner_with_pets_in_insertion_order(self, engine):
        result = query(engine, "owner", {"id": 4}, select("name", field("pets", "name")))

        assert result.errors == []
        assert result.data == {
            "owner": {
                "name": "Bob",
                "pets": [{"name": "Bark Twain"}, {"name": "Jimmy Chew"}, {"name": "Pup Tart"}],
            }
        }

    def test_pet_with_owner(self, engine):
        result = query(engine, "pet", {"id": 1}, select("id", "name", field("owner", "name")))
        assert result.data["pet"] == {
            "id": 1,
            "name": "Groucho Barks",
            "owner": {"name": "Joey Calamad"},
        }

    def test_pets_lists_every_pet(self, engine):
        result = query(engine, "pets", selection=select("id", "name"))
        assert result.data["pets"] == [{"id": p.id, "name": p.name} for p in SEED_PETS]

    def test_owners_lists_every_owner(self, engine):
        result = query(engine, "owners", selection=select("name"))
        assert [o["name"] for o in result.data["owners"]] == [o.name for o in SEED_OWNERS]

    def test_missing_pet_is_null(self, engine):
        result = query(engine, "pet", {"id": 404}, select("name", field("owner", "name")))
        assert result.data == {"pet": None}
        assert result.errors == []

    def test_pet_without_id_is_null(self, engine):
        assert query(engine, "pet", {}, select("name")).data == {"pet": None}

    def test_operation_kind_enum_accepted(self, engine):
        result = engine.execute(OperationKind.QUERY, "owner", {"id": 1}, select("name"))
        assert result.data == {"owner": {"name": "Joey Calamad"}}

    def test_root_alias(self, engine):
        result = query(engine, "owner", {"id": 2}, select("name"), alias="second")
        assert result.data == {"second": {"name": "Johnny Basanagol"}}

    def test_to_dict_omits_empty_errors(self, engine):
        assert query(engine, "owner", {"id": 3}, select("id")).to_dict() == {
            "data": {"owner": {"id": 3}}
        }


class TestSelectionShape:
    def test_field_order_follows_selection(self, engine):
        result = query(engine, "pet", {"id": 2}, select("ownerId", "name", "id"))
        assert list(result.data["pet"]) == ["ownerId", "name", "id"]

    def test_alias_becomes_response_key(self, engine):
        selection = (
            FieldSelection("name", alias="petName"),
            FieldSelection("owner", select("name"), alias="keeper"),
        )
        result = query(engine, "pet", {"id": 5}, selection)
        assert result.data["pet"] == {"petName": "Jimmy Chew", "keeper": {"name": "Bob"}}

    def test_typename(self, engine):
        selection = select("__typename", field("pets", "__typename"))
        result = query(engine, "owner", {"id": 4}, selection)
        assert result.data["owner"]["__typename"] == "Owner"
        assert {p["__typename"] for p in result.data["owner"]["pets"]} == {"Pet"}

    def test_cyclic_selection_resolves_only_requested_depth(self, engine):
        selection = select(field("owner", field("pets", field("owner", "name"))))
        result = query(engine, "pet", {"id": 2}, selection)

        pets = result.data["pet"]["owner"]["pets"]
        assert [p["owner"] for p in pets] == [{"name": "Bob"}] * 3
        assert set(pets[0]) == {"owner"}

    def test_result_keys_match_selection_for_every_entity(self, engine):
        selection = select("id", field("pets", "name", field("owner", "id")))
        result = query(engine, "owners", selection=selection)

        for owner in result.data["owners"]:
            assert set(owner) == {"id", "pets"}
            for pet in owner["pets"]:
                assert set(pet) == {"name", "owner"}
                assert set(pet["owner"]) == {"id"}

    def test_owner_without_pets_gets_empty_list(self, engine, store):
        engine.execute("mutation", "addNewOwner", {"name": "Petless"}, select("id"))
        result = query(engine, "owner", {"id": 5}, select(field("pets", "name")))
        assert result.data["owner"]["pets"] == []

    def test_relationship_without_subfields_yields_empty_objects(self, engine):
        result = query(engine, "owner", {"id": 4}, select("pets"))
        assert result.data["owner"]["pets"] == [{}, {}, {}]

    def test_relationships_are_not_resolved_unless_selected(self, engine):
        with patch.object(engine.store, "find_where", wraps=engine.store.find_where) as find_where:
            query(engine, "owners", selection=select("name"))
        find_where.assert_not_called()


class TestRelationshipProperties:
    def test_pet_owner_matches_owner_id(self, engine):
        for pet in SEED_PETS:
            result = query(engine, "pet", {"id": pet.id}, select("ownerId", field("owner", "id")))
            assert result.data["pet"]["owner"]["id"] == pet.owner_id

    def test_pet_with_missing_owner_has_null_owner(self, engine):
        engine.execute("mutation", "addNewPet", {"name": "Stray", "ownerId": 999}, select("id"))
        result = query(engine, "pet", {"id": 11}, select("name", field("owner", "name")))
        assert result.data["pet"] == {"name": "Stray", "owner": None}

    def test_owner_pets_are_exactly_matching_pets(self, engine):
        for owner in SEED_OWNERS:
            selection = select(field("pets", "id", "ownerId"))
            result = query(engine, "owner", {"id": owner.id}, selection)
            pets = result.data["owner"]["pets"]
            expected = [p.id for p in SEED_PETS if p.owner_id == owner.id]
            assert [p["id"] for p in pets] == expected
            assert all(p["ownerId"] == owner.id for p in pets)

    def test_repeated_reads_are_identical(self, engine):
        selection = select("id", "name", field("pets", "name", field("owner", "name")))
        first = query(engine, "owners", selection=selection)
        second = query(engine, "owners", selection=selection)
        assert first == second

    def test_memoized_engine_gives_same_result(self, registry, store):
        selection = select(field("owner", "name", field("pets", field("owner", "id"))))
        plain = Engine(registry, store).execute("query", "pets", {}, selection)
        memoized = Engine(registry, store, memoize=True).execute("query", "pets", {}, selection)
        assert plain == memoized

    def test_memoization_reuses_lookups_within_one_execution(self, registry, store):
        engine = Engine(registry, store, memoize=True)
        with patch.object(store, "find_by_id", wraps=store.find_by_id) as find_by_id:
            engine.execute("query", "pets", {}, select(field("owner", "id")))
        # One lookup per pet; each (Pet, id, owner) key is distinct
        assert find_by_id.call_count == len(SEED_PETS)

        with patch.object(store, "find_where", wraps=store.find_where) as find_where:
            engine.execute(
                "query",
                "owner",
                {"id": 4},
                (
                    FieldSelection("pets", select("id")),
                    FieldSelection("pets", select("name"), alias="again"),
                ),
            )
        assert find_where.call_count == 1


class TestMutations:
    def test_add_new_owner(self, engine, store):
        result = engine.execute(
            "mutation", "addNewOwner", {"name": "This guy"}, select("id", "name")
        )

        assert result.data == {"addNewOwner": {"id": 5, "name": "This guy"}}
        owners = query(engine, "owners", selection=select("id")).data["owners"]
        assert len(owners) == 5

    def test_add_new_pet_visible_in_pets(self, engine):
        before = query(engine, "pets", selection=select("id")).data["pets"]
        result = engine.execute(
            "mutation",
            "addNewPet",
            {"name": "Lucky", "ownerId": 2},
            select("id", "name", "ownerId"),
        )
        after = query(engine, "pets", selection=select("id", "name", "ownerId")).data["pets"]

        created = result.data["addNewPet"]
        assert created["id"] not in {p["id"] for p in before}
        assert [p for p in after if p["name"] == "Lucky" and p["ownerId"] == 2] == [created]
        assert len(after) == len(before) + 1

    def test_new_pet_appears_under_owner(self, engine):
        engine.execute("mutation", "addNewPet", {"name": "Lucky", "ownerId": 4}, select("id"))
        result = query(engine, "owner", {"id": 4}, select(field("pets", "name")))
        assert result.data["owner"]["pets"][-1] == {"name": "Lucky"}

    def test_mutation_result_supports_nested_selection(self, engine):
        result = engine.execute(
            "mutation",
            "addNewPet",
            {"name": "Lucky", "ownerId": 2},
            select(field("owner", "name")),
        )
        assert result.data["addNewPet"] == {"owner": {"name": "Johnny Basanagol"}}

    def test_concurrent_add_new_owner_ids_are_unique(self, engine, store):
        barrier = threading.Barrier(10)
        ids: list[int] = []
        lock = threading.Lock()

        def add(n: int) -> None:
            barrier.wait()
            result = engine.execute("mutation", "addNewOwner", {"name": f"o{n}"}, select("id"))
            with lock:
                ids.append(result.data["addNewOwner"]["id"])

        threads = [threading.Thread(target=add, args=(n,)) for n in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(ids) == list(range(5, 15))


class TestErrors:
    def test_unknown_root_field(self, engine):
        with pytest.raises(UnknownField) as exc_info:
            query(engine, "cats", selection=select("name"))
        assert exc_info.value.type_name == "Query"
        assert exc_info.value.field_name == "cats"

    def test_mutation_name_is_unknown_under_query(self, engine):
        with pytest.raises(UnknownField):
            query(engine, "addNewOwner", {"name": "x"}, select("id"))

    def test_unknown_operation_kind(self, engine):
        with pytest.raises(UnknownField):
            engine.execute("subscription", "pets", {}, select("id"))

    def test_unknown_nested_field(self, engine):
        with pytest.raises(UnknownField) as exc_info:
            query(engine, "owner", {"id": 1}, select(field("pets", "species")))
        assert exc_info.value.type_name == "Pet"

    def test_unknown_nested_field_does_not_apply_mutation(self, engine, store):
        with pytest.raises(UnknownField):
            engine.execute("mutation", "addNewOwner", {"name": "x"}, select("age"))
        assert store.count(Collection.OWNERS) == 4

    @pytest.mark.parametrize("arguments", [{}, {"name": None}, {"ownerId": 1}])
    def test_missing_argument_does_not_apply_mutation(self, engine, store, arguments):
        with pytest.raises(MissingArgument):
            engine.execute("mutation", "addNewPet", arguments, select("id"))
        assert store.count(Collection.PETS) == 10

    @pytest.mark.parametrize(
        "arguments",
        [
            {"name": 7, "ownerId": 1},
            {"name": "Rex", "ownerId": "1"},
            {"name": "Rex", "ownerId": True},
        ],
    )
    def test_type_mismatch(self, engine, store, arguments):
        with pytest.raises(TypeMismatch):
            engine.execute("mutation", "addNewPet", arguments, select("id"))
        assert store.count(Collection.PETS) == 10

    def test_unknown_argument(self, engine):
        with pytest.raises(UnknownArgument):
            query(engine, "pets", {"limit": 2}, select("id"))

    def test_failing_relationship_does_not_block_siblings(self, engine):
        with patch.object(engine.store, "find_where", side_effect=RuntimeError("boom")):
            result = query(engine, "owner", {"id": 4}, select("name", field("pets", "name"), "id"))

        assert result.data == {"owner": {"name": "Bob", "pets": None, "id": 4}}
        assert [e.to_dict() for e in result.errors] == [
            {"message": "boom", "path": ["owner", "pets"]}
        ]

    def test_failing_relationship_in_list_reports_index(self, engine):
        original = engine.store.find_by_id

        def flaky(collection, entity_id):
            if collection is Collection.OWNERS and entity_id == 3:
                raise RuntimeError("owner lookup failed")
            return original(collection, entity_id)

        with patch.object(engine.store, "find_by_id", side_effect=flaky):
            result = query(engine, "pets", selection=select("id", field("owner", "id")))

        pets = result.data["pets"]
        assert pets[5] == {"id": 6, "owner": None}
        assert pets[0] == {"id": 1, "owner": {"id": 1}}
        assert [e.path for e in result.errors] == [
            ("pets", 5, "owner"),
            ("pets", 6, "owner"),
            ("pets", 8, "owner"),
        ]

    def test_failing_root_resolver_becomes_null(self, engine):
        with patch.object(engine.store, "scan_all", side_effect=RuntimeError("down")):
            result = query(engine, "pets", selection=select("id"))
        assert result.data == {"pets": None}
        assert result.errors[0].path == ("pets",)
