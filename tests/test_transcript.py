"""Unit and property-based tests for the transcript module."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from concise_chat.errors import InvalidArgumentError, NotFoundError
from concise_chat.transcript import Message, MessageIdGenerator, Sender, TranscriptStore


class TestMessageIdGenerator:
    """Tests for MessageIdGenerator."""

    def test_ids_are_strictly_increasing(self):
        """Test that consecutive ids never repeat."""
        ids = MessageIdGenerator()
        issued = [ids.next() for _ in range(100)]
        assert issued == sorted(set(issued))
        assert issued[0] == 1
        assert ids.last == 100

    def test_invalid_start_fails(self):
        """Test that ids cannot start below 1."""
        with pytest.raises(ValueError):
            MessageIdGenerator(start=0)

    def test_advance_skips_used_ids(self):
        """Test that advance moves the counter past an externally chosen id."""
        ids = MessageIdGenerator()
        ids.next()
        ids.advance(50)
        assert ids.last == 50
        assert ids.next() == 51

    def test_advance_never_moves_backwards(self):
        """Test that advancing to an old id is a no-op."""
        ids = MessageIdGenerator(start=10)
        ids.next()
        ids.advance(3)
        assert ids.next() == 11


class TestMessage:
    """Tests for the Message model."""

    def test_message_is_frozen(self):
        """Test that a message cannot be mutated in place."""
        msg = Message(id=1, text="hi", sender=Sender.USER)
        with pytest.raises(ValueError):
            msg.text = "bye"  # type: ignore[misc]

    def test_sender_helpers(self):
        """Test is_user / is_assistant helpers."""
        assert Message(id=1, text="a", sender=Sender.USER).is_user
        assert Message(id=2, text="b", sender="assistant").is_assistant


class TestTranscriptStore:
    """Tests for TranscriptStore."""

    @pytest.fixture
    def store(self):
        """Create a store holding greeting, user, assistant, user, assistant."""
        store = TranscriptStore()
        store.reset("Hello!")
        store.add(Sender.USER, "first")
        store.add(Sender.ASSISTANT, "reply 1")
        store.add(Sender.USER, "second")
        store.add(Sender.ASSISTANT, "reply 2")
        return store

    def test_reset_leaves_single_greeting(self, store):
        """Test that reset replaces everything with one assistant message."""
        greeting = store.reset("Welcome back")

        assert len(store) == 1
        assert store[0] == greeting
        assert greeting.sender == Sender.ASSISTANT
        assert greeting.text == "Welcome back"

    def test_reset_never_reuses_ids(self, store):
        """Test that ids keep increasing across resets."""
        last_id = store.last.id
        greeting = store.reset("Again")
        assert greeting.id > last_id

    def test_add_appends_in_order(self):
        """Test that add assigns increasing ids in order."""
        store = TranscriptStore()
        first = store.add(Sender.USER, "a")
        second = store.add(Sender.ASSISTANT, "b")

        assert store.messages == (first, second)
        assert first.id < second.id
        assert first.created_at <= second.created_at

    def test_add_after_append_continues_past_appended_id(self, store):
        """Test that append keeps ids from add unique and increasing."""
        store.append(Message(id=50, text="imported", sender=Sender.USER))

        reply = store.add(Sender.ASSISTANT, "reply")

        assert reply.id == 51
        assert store.last == reply
        assert store.reset("again").id == 52

    def test_append_rejects_non_increasing_id(self, store):
        """Test that append refuses duplicate or older ids."""
        duplicate = Message(id=store.last.id, text="dup", sender=Sender.USER)
        with pytest.raises(ValueError):
            store.append(duplicate)

    def test_edit_truncates_everything_after(self, store):
        """Test that editing drops later assistant and user messages."""
        target = store[1]
        edited = store.edit_user_message(target.id, "changed")

        assert len(store) == 2
        assert store.last == edited
        assert edited.text == "changed"
        assert edited.id == target.id
        assert edited.created_at == target.created_at
        assert edited.sender == Sender.USER

    def test_edit_last_user_message_drops_only_reply(self, store):
        """Test editing the latest user message removes just its reply."""
        edited = store.edit_user_message(store[3].id, "again")
        assert len(store) == 4
        assert store.last == edited

    def test_edit_keeps_text_as_given(self, store):
        """Test that surrounding whitespace is preserved on edit."""
        edited = store.edit_user_message(store[1].id, "  padded  ")
        assert edited.text == "  padded  "

    def test_edit_unknown_id_raises_not_found(self, store):
        """Test that an unknown id leaves the transcript unchanged."""
        before = store.messages
        with pytest.raises(NotFoundError):
            store.edit_user_message(9999, "text")
        assert store.messages == before

    def test_edit_assistant_message_raises_not_found(self, store):
        """Test that assistant messages can never be edited."""
        before = store.messages
        with pytest.raises(NotFoundError):
            store.edit_user_message(store[2].id, "text")
        assert store.messages == before

    @pytest.mark.parametrize("blank", ["", "   ", "\n\t"])
    def test_edit_blank_text_raises_invalid_argument(self, store, blank):
        """Test that blank replacement text is rejected."""
        before = store.messages
        with pytest.raises(InvalidArgumentError):
            store.edit_user_message(store[1].id, blank)
        assert store.messages == before

    def test_accessors(self, store):
        """Test read-only accessors."""
        second = store[1]
        assert store.get(second.id) == second
        assert store.index_of(second.id) == 1
        assert store.messages_from(3) == store.messages[3:]
        assert list(store) == list(store.messages)

        with pytest.raises(NotFoundError):
            store.get(9999)
        with pytest.raises(NotFoundError):
            store.index_of(9999)
        with pytest.raises(IndexError):
            store.messages_from(-1)

    def test_messages_is_a_copy(self, store):
        """Test that readers cannot mutate the log through messages."""
        assert isinstance(store.messages, tuple)

    @given(
        turns=st.integers(min_value=1, max_value=8),
        data=st.data(),
        new_text=st.text(min_size=1).filter(lambda s: s.strip()),
    )
    def test_edit_property_length_and_content(self, turns, data, new_text):
        """Property test: editing position i leaves exactly i+1 messages ending in the edit."""
        store = TranscriptStore()
        store.reset("Hello!")
        for n in range(turns):
            store.add(Sender.USER, f"user {n}")
            store.add(Sender.ASSISTANT, f"bot {n}")

        user_positions = [i for i, m in enumerate(store) if m.is_user]
        position = data.draw(st.sampled_from(user_positions))
        before = store.messages
        removed_ids = {m.id for m in before[position + 1:]}

        store.edit_user_message(before[position].id, new_text)

        assert len(store) == position + 1
        assert store.last.text == new_text
        assert not removed_ids & {m.id for m in store}
        assert store.messages[:position] == before[:position]
