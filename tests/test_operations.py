import pytest

from scholarly import models
from scholarly import operations as ops
from scholarly.errors import NotFoundError, PermissionDeniedError, UnauthorizedError, ValidationError
from scholarly.models import ResourceType
from scholarly.session import HubSession

from conftest import staff_of, student_of


class TestCreateHub:
    def test_prepends_without_entering(self, academy):
        hubs, existing, _, _ = academy
        ctx = HubSession()
        new_hubs, hub = ops.create_hub(hubs, name='Second', student_passphrase='s',
                                       admin_passphrase='a', description='More')
        assert [h.id for h in new_hubs] == [hub.id, existing.id]
        assert hub.description == 'More'
        assert not ctx.is_entered
        assert len(hubs) == 1

    def test_requires_name_and_passphrases(self):
        with pytest.raises(ValidationError):
            ops.create_hub([], name='Hub', student_passphrase='', admin_passphrase='a')

    def test_regenerates_colliding_id(self, academy, monkeypatch):
        hubs, existing, _, _ = academy
        ids = iter([existing.id, existing.id, 'fresh-id'])
        monkeypatch.setattr(models, 'new_id', lambda: next(ids))
        _, hub = ops.create_hub(hubs, name='Second', student_passphrase='s', admin_passphrase='a')
        assert hub.id == 'fresh-id'


class TestDeleteHub:
    def test_wrong_passphrase_is_unauthorized(self, academy):
        hubs, hub, _, _ = academy
        with pytest.raises(UnauthorizedError):
            ops.delete_hub(hubs, hub.id, 'wrong')
        assert ops.find_hub(hubs, hub.id) is hub

    def test_student_code_cannot_delete(self, academy):
        hubs, hub, _, _ = academy
        with pytest.raises(UnauthorizedError):
            ops.delete_hub(hubs, hub.id, 'S1', staff_of(hub))

    def test_admin_passphrase_deletes(self, academy):
        hubs, hub, _, _ = academy
        assert ops.delete_hub(hubs, hub.id, 'A1') == []

    def test_unknown_hub_is_a_no_op(self, academy):
        hubs, _, _, _ = academy
        assert ops.delete_hub(hubs, 'missing', 'A1') == hubs

    def test_student_session_can_delete_with_admin_passphrase(self, academy):
        hubs, hub, _, _ = academy
        ctx = student_of(hub)
        assert ops.delete_hub(hubs, hub.id, 'A1', ctx) == []
        assert not ctx.is_entered

    def test_other_session_is_left_alone(self, academy):
        hubs, hub, _, _ = academy
        hubs, other = ops.create_hub(hubs, name='Other', student_passphrase='s', admin_passphrase='a')
        ctx = staff_of(other)
        ops.delete_hub(hubs, hub.id, 'A1', ctx)
        assert ctx.hub_id == other.id


class TestCreateRoom:
    def test_prepends_room(self, academy):
        hubs, hub, r1, r2 = academy
        new_hubs, room = ops.create_room(hubs, staff_of(hub), hub.id, name='R3', teacher='Dr. New')
        updated = ops.find_hub(new_hubs, hub.id)
        assert [c.id for c in updated.classes] == [room.id, r1.id, r2.id]
        assert room.resources == []
        assert hub.room_count == 2

    def test_requires_staff_session(self, academy):
        hubs, hub, _, _ = academy
        with pytest.raises(PermissionDeniedError):
            ops.create_room(hubs, student_of(hub), hub.id, name='R3', teacher='T')
        with pytest.raises(PermissionDeniedError):
            ops.create_room(hubs, HubSession(), hub.id, name='R3', teacher='T')

    def test_staff_of_another_hub_is_denied(self, academy):
        hubs, hub, _, _ = academy
        hubs, other = ops.create_hub(hubs, name='Other', student_passphrase='s', admin_passphrase='a')
        with pytest.raises(PermissionDeniedError):
            ops.create_room(hubs, staff_of(other), hub.id, name='R3', teacher='T')

    def test_unknown_hub(self, academy):
        hubs, _, _, _ = academy
        ctx = HubSession()
        ctx.enter('missing', 'ADMIN')
        with pytest.raises(NotFoundError):
            ops.create_room(hubs, ctx, 'missing', name='R3', teacher='T')

    def test_requires_teacher(self, academy):
        hubs, hub, _, _ = academy
        with pytest.raises(ValidationError):
            ops.create_room(hubs, staff_of(hub), hub.id, name='R3', teacher='  ')


class TestPublishResource:
    def test_prepends_and_keeps_prior_order(self, academy):
        hubs, hub, r1, _ = academy
        staff = staff_of(hub)
        hubs, second = ops.publish_resource(hubs, staff, hub.id, r1.id, type='ANNOUNCEMENT',
                                            title='second', description='d', now=3000)
        hubs, third = ops.publish_resource(hubs, staff, hub.id, r1.id, type=ResourceType.TIMETABLE,
                                           title='third', description='d', url='https://example.com')
        room = ops.find_hub(hubs, hub.id).find_room(r1.id)
        assert [r.title for r in room.resources] == ['third', 'second', 'doc1']
        assert room.resources[0] == third
        assert second.created_at == 3000
        assert third.created_at > 0
        assert third.url == 'https://example.com'

    def test_does_not_modify_input(self, academy):
        hubs, hub, r1, _ = academy
        ops.publish_resource(hubs, staff_of(hub), hub.id, r1.id, type='VIDEO', title='t', description='d')
        assert [r.title for r in ops.find_hub(hubs, hub.id).find_room(r1.id).resources] == ['doc1']

    def test_requires_staff_session(self, academy):
        hubs, hub, r1, _ = academy
        with pytest.raises(PermissionDeniedError):
            ops.publish_resource(hubs, student_of(hub), hub.id, r1.id, type='VIDEO', title='t', description='d')

    def test_rejects_unknown_type_and_blank_fields(self, academy):
        hubs, hub, r1, _ = academy
        staff = staff_of(hub)
        with pytest.raises(ValidationError):
            ops.publish_resource(hubs, staff, hub.id, r1.id, type='MEME', title='t', description='d')
        with pytest.raises(ValidationError):
            ops.publish_resource(hubs, staff, hub.id, r1.id, type='VIDEO', title='t', description='')

    def test_unknown_room(self, academy):
        hubs, hub, _, _ = academy
        with pytest.raises(NotFoundError):
            ops.publish_resource(hubs, staff_of(hub), hub.id, 'missing', type='VIDEO', title='t', description='d')

    def test_new_ids_are_unique(self, academy):
        hubs, hub, r1, _ = academy
        staff = staff_of(hub)
        for i in range(20):
            hubs, _ = ops.publish_resource(hubs, staff, hub.id, r1.id, type='DOCUMENT',
                                           title=f't{i}', description='d')
        ids = [r.id for r in ops.find_hub(hubs, hub.id).find_room(r1.id).resources]
        assert len(set(ids)) == len(ids)


class TestDeleteResource:
    def test_removes_resource(self, academy):
        hubs, hub, r1, _ = academy
        doc1 = r1.resources[0]
        hubs = ops.delete_resource(hubs, staff_of(hub), hub.id, r1.id, doc1.id)
        assert ops.find_hub(hubs, hub.id).find_room(r1.id).resources == []

    def test_missing_resource_is_a_no_op(self, academy):
        hubs, hub, r1, _ = academy
        assert ops.delete_resource(hubs, staff_of(hub), hub.id, r1.id, 'missing') == hubs
        assert ops.delete_resource(hubs, staff_of(hub), hub.id, 'missing', 'missing') == hubs

    def test_requires_staff_session(self, academy):
        hubs, hub, r1, _ = academy
        with pytest.raises(PermissionDeniedError):
            ops.delete_resource(hubs, student_of(hub), hub.id, r1.id, r1.resources[0].id)


def test_commit_persists_full_tree(store, academy):
    hubs = academy[0]
    assert ops.commit(store, hubs) is hubs
    assert store.load() == hubs
