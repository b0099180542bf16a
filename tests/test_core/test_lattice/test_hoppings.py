"""
Unit tests for hopping families and hopping terms.

Tests:
- Named hopping energies
- Term validation (onsite, lookups, sizes)
- Duplicate and conjugate bonds
- Energy-valued hoppings and family reuse
"""

import dataclasses
import numpy as np
import pytest
from tblattice import (
    Lattice,
    HoppingTerm,
    ErrorKind,
    InvalidArgumentError,
    HoppingSizeMismatchError,
    ConflictError,
    DuplicateHoppingError,
    NotFoundError,
    CapacityExceededError,
)
from tblattice.core.lattice.canonical import find_conjugate_match, is_duplicate
from tblattice.utils.constants import HOPPING_ID_MAX


def two_site_lattice():
    """Square lattice with a 1-orbital site A and a 2-orbital site B."""
    lattice = Lattice(a1=[1, 0, 0], a2=[0, 1, 0])
    lattice.add_sublattice('A', [0, 0, 0], 0.0)
    lattice.add_sublattice('B', [0.5, 0.5, 0], [1.0, -1.0])
    return lattice


class TestHoppingEnergies:
    """Test register_hopping_energy."""

    def test_scalar_energy(self):
        lattice = two_site_lattice()
        family = lattice.register_hopping_energy('t', -1.0)

        assert family.unique_id == 0
        assert family.shape == (1, 1)
        assert family.terms == ()

    def test_matrix_energy(self):
        lattice = two_site_lattice()
        family = lattice.register_hopping_energy('t_ab', [[1, 2j]])

        assert family.shape == (1, 2)
        assert np.iscomplexobj(family.energy)

    def test_blank_name(self):
        lattice = two_site_lattice()

        with pytest.raises(InvalidArgumentError, match="Hopping name can't be blank"):
            lattice.register_hopping_energy('', 1.0)

    def test_duplicate_name(self):
        lattice = two_site_lattice()
        lattice.register_hopping_energy('t', 1.0)

        with pytest.raises(ConflictError, match="Hopping 't' already exists"):
            lattice.register_hopping_energy('t', 2.0)
        assert lattice.hopping_family('t').energy[0, 0] == 1.0

    def test_vector_energy_rejected(self):
        lattice = two_site_lattice()

        with pytest.raises(InvalidArgumentError, match="scalar or a non-empty matrix"):
            lattice.register_hopping_energy('t', [1.0, 2.0])

    def test_capacity(self):
        lattice = two_site_lattice()
        for i in range(HOPPING_ID_MAX + 1):
            lattice.register_hopping_energy(f"t{i}", float(i))

        with pytest.raises(CapacityExceededError):
            lattice.register_hopping_energy('overflow', 0.0)

    def test_register_hopping_energies(self):
        lattice = two_site_lattice()
        lattice.register_hopping_energies({'t1': -1.0, 't2': -0.5})

        assert lattice.hop_name_map() == {'t1': 0, 't2': 1}

    def test_lookup_by_id(self):
        lattice = two_site_lattice()
        lattice.register_hopping_energies({'t1': -1.0, 't2': -0.5})

        assert lattice.hopping_family(1).name == 't2'
        with pytest.raises(NotFoundError, match="There is no hopping with ID = 2"):
            lattice.hopping_family(2)
        with pytest.raises(NotFoundError, match="There is no hopping named 'x'"):
            lattice.hopping_family('x')

    def test_complex_hoppings_flag(self):
        lattice = two_site_lattice()
        lattice.register_hopping_energy('t', -1.0)
        assert not lattice.has_complex_hoppings()

        lattice.register_hopping_energy('t_so', 0.1j)
        assert lattice.has_complex_hoppings()


class TestAddHopping:
    """Test add_hopping with a named family."""

    def test_term_stored(self):
        lattice = two_site_lattice()
        lattice.register_hopping_energy('t', -1.0)
        term = lattice.add_hopping([1, 0], 'A', 'A', 't')

        assert term == HoppingTerm((1, 0, 0), 0, 0)
        assert lattice.hopping_family('t').terms == (term,)

    def test_zero_index_same_sublattice(self):
        lattice = two_site_lattice()
        lattice.register_hopping_energy('t', -1.0)

        with pytest.raises(InvalidArgumentError, match="Don't define onsite energy here"):
            lattice.add_hopping([0, 0, 0], 'A', 'A', 't')

    def test_zero_index_different_sublattices(self):
        lattice = two_site_lattice()
        lattice.register_hopping_energy('t_ab', [[1.0, 1.0]])

        term = lattice.add_hopping([0, 0, 0], 'A', 'B', 't_ab')
        assert term.relative_index == (0, 0, 0)

    def test_unknown_sublattice(self):
        lattice = two_site_lattice()
        lattice.register_hopping_energy('t', -1.0)

        with pytest.raises(NotFoundError, match="There is no sublattice named 'C'"):
            lattice.add_hopping([1, 0], 'A', 'C', 't')

    def test_unknown_family(self):
        lattice = two_site_lattice()

        with pytest.raises(NotFoundError, match="There is no hopping named 't'"):
            lattice.add_hopping([1, 0], 'A', 'A', 't')

    def test_size_mismatch(self):
        lattice = two_site_lattice()
        lattice.register_hopping_energy('t', -1.0)

        with pytest.raises(HoppingSizeMismatchError) as info:
            lattice.add_hopping([1, 0], 'A', 'B', 't')

        message = str(info.value)
        assert "from 'A' (1)" in message
        assert "to 'B' (2)" in message
        assert "'t' (1, 1)" in message
        assert info.value.kind is ErrorKind.INVALID_ARGUMENT
        assert lattice.hopping_family('t').terms == ()

    def test_size_match_rows_and_cols(self):
        lattice = two_site_lattice()
        lattice.register_hopping_energy('t_ba', [[1.0], [2.0]])

        lattice.add_hopping([1, 0], 'B', 'A', 't_ba')
        with pytest.raises(HoppingSizeMismatchError):
            lattice.add_hopping([1, 0], 'A', 'B', 't_ba')

    def test_non_integer_index(self):
        lattice = two_site_lattice()
        lattice.register_hopping_energy('t', -1.0)

        with pytest.raises(InvalidArgumentError, match="integer"):
            lattice.add_hopping([0.5, 0], 'A', 'A', 't')


class TestDuplicateHoppings:
    """Test that each undirected bond is stored once."""

    def test_same_term_twice(self):
        lattice = two_site_lattice()
        lattice.register_hopping_energy('t', -1.0)
        lattice.add_hopping([1, 0], 'A', 'A', 't')

        with pytest.raises(DuplicateHoppingError, match="already exists") as info:
            lattice.add_hopping([1, 0, 0], 'A', 'A', 't')
        assert info.value.kind is ErrorKind.CONFLICT

    def test_conjugate_same_sublattice(self):
        lattice = two_site_lattice()
        lattice.register_hopping_energy('t', -1.0)
        lattice.add_hopping([1, 0], 'A', 'A', 't')

        with pytest.raises(DuplicateHoppingError):
            lattice.add_hopping([-1, 0], 'A', 'A', 't')

    def test_conjugate_in_other_family(self):
        """(-r, to, from) is rejected even under a different family."""
        lattice = two_site_lattice()
        lattice.register_hopping_energy('t_ab', [[1.0, 1.0]])
        lattice.register_hopping_energy('t_ba', [[1.0], [1.0]])
        lattice.add_hopping([1, 0], 'A', 'B', 't_ab')

        with pytest.raises(DuplicateHoppingError, match="t_ab"):
            lattice.add_hopping([-1, 0], 'B', 'A', 't_ba')

    def test_distinct_terms_accepted(self):
        lattice = two_site_lattice()
        lattice.register_hopping_energy('t', -1.0)
        lattice.add_hoppings(
            ([1, 0], 'A', 'A', 't'),
            ([0, 1], 'A', 'A', 't'),
            ([1, 1], 'A', 'A', 't'),
            ([1, -1], 'A', 'A', 't'),
        )

        assert len(lattice.hopping_family('t').terms) == 4

    def test_reverse_direction_same_index_is_distinct(self):
        """(r, B, A) is not the conjugate of (r, A, B)."""
        lattice = two_site_lattice()
        lattice.register_hopping_energy('t_ab', [[1.0, 1.0]])
        lattice.register_hopping_energy('t_ba', [[1.0], [1.0]])
        lattice.add_hopping([1, 0], 'A', 'B', 't_ab')
        lattice.add_hopping([1, 0], 'B', 'A', 't_ba')

        assert lattice.hoppings.num_terms() == 2

    def test_canonicalizer_predicate(self):
        lattice = two_site_lattice()
        lattice.register_hopping_energy('t', -1.0)
        lattice.add_hopping([1, 0], 'A', 'A', 't')
        stored = HoppingTerm((1, 0, 0), 0, 0)

        family, term = find_conjugate_match(lattice.hoppings, HoppingTerm((-1, 0, 0), 0, 0))
        assert family.name == 't'
        assert term == stored
        assert is_duplicate(lattice.hoppings, stored)
        assert not is_duplicate(lattice.hoppings, HoppingTerm((0, 1, 0), 0, 0))

    def test_conjugate_of_term(self):
        term = HoppingTerm((1, -2, 0), 0, 3)
        assert term.conjugate() == HoppingTerm((-1, 2, 0), 3, 0)


class TestFamilySnapshots:
    """Families handed out by lookups can't be used to edit the hopping graph."""

    def test_terms_cannot_be_appended(self):
        lattice = two_site_lattice()
        lattice.register_hopping_energy('t', -1.0)
        term = lattice.add_hopping([1, 0], 'A', 'A', 't')
        family = lattice.hopping_family('t')

        with pytest.raises(AttributeError):
            family.terms.append(term.conjugate())
        with pytest.raises(dataclasses.FrozenInstanceError):
            family.terms = ()

        assert lattice.hopping_family('t').terms == (term,)

    def test_old_reference_is_unchanged(self):
        lattice = two_site_lattice()
        before = lattice.register_hopping_energy('t', -1.0)
        lattice.add_hopping([1, 0], 'A', 'A', 't')

        assert before.terms == ()
        assert len(lattice.hopping_family('t').terms) == 1

    def test_catalog_rejects_conjugate(self):
        """Appending through the catalog still goes through the duplicate check."""
        lattice = two_site_lattice()
        lattice.register_hopping_energy('t', -1.0)
        term = lattice.add_hopping([1, 0], 'A', 'A', 't')
        family = lattice.hopping_family('t')

        with pytest.raises(DuplicateHoppingError):
            lattice.hoppings.append_term(family, term.conjugate())
        with pytest.raises(DuplicateHoppingError):
            lattice.hoppings.append_term(family, term)

        assert lattice.hoppings.num_terms() == 1

    def test_catalog_append_with_stale_family(self):
        lattice = two_site_lattice()
        stale = lattice.register_hopping_energy('t', -1.0)
        lattice.add_hopping([1, 0], 'A', 'A', 't')

        updated = lattice.hoppings.append_term(stale, HoppingTerm((0, 1, 0), 0, 0))

        assert len(updated.terms) == 2
        assert lattice.hopping_family('t') is updated


class TestEnergyHoppings:
    """Test add_hopping with an energy value instead of a family name."""

    def test_anonymous_family_created(self):
        lattice = two_site_lattice()
        lattice.add_hopping([1, 0], 'A', 'A', -1.0)

        assert lattice.hop_name_map() == {'__anonymous__0': 0}

    def test_equal_energy_reuses_family(self):
        lattice = two_site_lattice()
        lattice.add_hopping([1, 0], 'A', 'A', -1.0)
        lattice.add_hopping([0, 1], 'A', 'A', -1.0)
        lattice.add_hopping([1, 1], 'A', 'A', -0.5)

        assert lattice.nhop == 2
        assert len(lattice.hopping_family('__anonymous__0').terms) == 2
        assert len(lattice.hopping_family('__anonymous__1').terms) == 1

    def test_reuses_named_family(self):
        lattice = two_site_lattice()
        lattice.register_hopping_energy('t', -1.0)
        lattice.add_hopping([1, 0], 'A', 'A', -1.0)

        assert lattice.nhop == 1
        assert len(lattice.hopping_family('t').terms) == 1

    def test_equality_is_exact(self):
        lattice = two_site_lattice()
        lattice.add_hopping([1, 0], 'A', 'A', -1.0)
        lattice.add_hopping([0, 1], 'A', 'A', -1.0 + 1e-12)

        assert lattice.nhop == 2

    def test_equality_includes_shape(self):
        lattice = two_site_lattice()
        lattice.register_hopping_energy('t_ab', [[1.0, 1.0]])
        lattice.add_hopping([1, 0], 'B', 'A', [[1.0], [1.0]])

        assert lattice.nhop == 2
        assert lattice.hopping_family('__anonymous__1').shape == (2, 1)

    def test_failed_hopping_leaves_no_family(self):
        lattice = two_site_lattice()

        with pytest.raises(HoppingSizeMismatchError, match="__anonymous__0"):
            lattice.add_hopping([1, 0], 'A', 'B', -1.0)
        assert lattice.nhop == 0

    def test_duplicate_energy_hopping_leaves_no_family(self):
        lattice = two_site_lattice()
        lattice.add_hopping([1, 0], 'A', 'A', -1.0)

        with pytest.raises(DuplicateHoppingError):
            lattice.add_hopping([-1, 0], 'A', 'A', -2.0)
        assert lattice.nhop == 1


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
