from enum import Enum
from typing import Optional

from sqlalchemy import Column, Integer, String, Text, Date, Float, ForeignKey, inspect
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class PersistenceState(str, Enum):
    """Cómo se trata una entidad relacionada al escribir un grafo."""
    NEW = "new"
    EXISTING_UNCHANGED = "existing_unchanged"


class EntityMixin:
    """Utilidades de identidad compartidas por todas las entidades ORM."""

    def mark_existing(self):
        """Marca esta instancia como una fila ya guardada y sin modificar."""
        self._persistence_state = PersistenceState.EXISTING_UNCHANGED
        return self

    def mark_new(self):
        """Marca esta instancia como una fila nueva a insertar."""
        self._persistence_state = PersistenceState.NEW
        return self

    @property
    def persistence_state(self) -> PersistenceState:
        # primero la marca explícita, luego la identidad ORM; nunca se mira el valor del id
        tagged: Optional[PersistenceState] = self.__dict__.get("_persistence_state")
        if tagged is not None:
            return tagged
        if inspect(self).has_identity:
            return PersistenceState.EXISTING_UNCHANGED
        return PersistenceState.NEW


#ORM: Series
class SeriesORM(EntityMixin, Base):
    __tablename__ = "series"
    id = Column(Integer, primary_key=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)

    comic_books = relationship(
        "ComicBookORM",
        back_populates="series",
        order_by="ComicBookORM.issue_number",
    )

    def __repr__(self) -> str:
        return f"<Series {self.id} {self.title!r}>"


#ORM: Artistas
class ArtistORM(EntityMixin, Base):
    __tablename__ = "artists"
    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)

    comic_books = relationship("ComicBookArtistORM", back_populates="artist")

    def __repr__(self) -> str:
        return f"<Artist {self.id} {self.name!r}>"


#ORM: Roles
class RoleORM(EntityMixin, Base):
    __tablename__ = "roles"
    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<Role {self.id} {self.name!r}>"


#ORM: Cómics
class ComicBookORM(EntityMixin, Base):
    __tablename__ = "comic_books"
    id = Column(Integer, primary_key=True)
    series_id = Column(Integer, ForeignKey("series.id"), nullable=False)
    issue_number = Column(Integer, nullable=False)
    description = Column(Text, nullable=True)
    published_on = Column(Date, nullable=True)
    average_rating = Column(Float, nullable=True)

    series = relationship("SeriesORM", back_populates="comic_books")
    #los créditos pertenecen al cómic; el almacén también borra en cascada
    artists = relationship(
        "ComicBookArtistORM",
        back_populates="comic_book",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def display_text(self) -> str:
        """Etiqueta legible "Serie #número"."""
        title = self.series.title if self.series is not None else "?"
        return f"{title} #{self.issue_number}"

    def add_artist(self, artist: ArtistORM, role: RoleORM) -> "ComicBookArtistORM":
        """Acredita a un artista con un rol en este cómic."""
        credit = ComicBookArtistORM(artist=artist, role=role)
        self.artists.append(credit)
        return credit

    def __repr__(self) -> str:
        return f"<ComicBook {self.id} series={self.series_id} #{self.issue_number}>"


#ORM: Créditos de cómic (cómic + artista + rol)
class ComicBookArtistORM(EntityMixin, Base):
    __tablename__ = "comic_book_artists"
    id = Column(Integer, primary_key=True)
    comic_book_id = Column(
        Integer, ForeignKey("comic_books.id", ondelete="CASCADE"), nullable=False
    )
    artist_id = Column(Integer, ForeignKey("artists.id"), nullable=False)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False)

    comic_book = relationship("ComicBookORM", back_populates="artists")
    artist = relationship("ArtistORM", back_populates="comic_books")
    role = relationship("RoleORM")

    def __repr__(self) -> str:
        return (
            f"<ComicBookArtist {self.id} comic_book={self.comic_book_id} "
            f"artist={self.artist_id} role={self.role_id}>"
        )


__all__ = [
    "Base",
    "PersistenceState",
    "SeriesORM",
    "ArtistORM",
    "RoleORM",
    "ComicBookORM",
    "ComicBookArtistORM",
]
