"""Per-entity repositories and their default seed data."""

from __future__ import annotations

from datetime import UTC, datetime
from functools import lru_cache

import bcrypt

from app.schemas.collection_point import BinStatus, CollectionPoint
from app.schemas.community import Alert, CollectionSchedule, Comment, CommunityPost, LocalProject
from app.schemas.gamification import (
    Challenge,
    ChallengeSubmission,
    JournalEntry,
    LedgerEntry,
    RedemptionRequest,
    Reward,
)
from app.schemas.request import CollectionRequest
from app.schemas.user import OrganizationData, Session, UserRecord
from app.services.common import RecordStore, Repository

NS_USERS = "users"
NS_SESSIONS = "sessions"
NS_REQUESTS = "requests"
NS_CHALLENGES = "challenges"
NS_REWARDS = "rewards"
NS_SUBMISSIONS = "submissions"
NS_REDEMPTIONS = "redemptions"
NS_POINTS = "points"
NS_LEDGER = "ledger_entries"
NS_JOURNAL = "journal"
NS_SCHEDULES = "schedules"
NS_ALERTS = "alerts"
NS_POSTS = "community_posts"
NS_PROJECTS = "projects"
NS_POINTS_OF_COLLECTION = "collection_points"

_SEEDED_AT = datetime(2025, 5, 1, 12, 0, tzinfo=UTC)


def hash_password(password: str) -> str:
    """Hash a plain password with bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def check_password(password: str, password_hash: str | None) -> bool:
    """Verify a password against its bcrypt hash."""
    if not password_hash:
        return False
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


def avatar_for(name: str, background: str = "random") -> str:
    """Return the generated avatar URL used across the portal."""
    return f"https://ui-avatars.com/api/?name={name}&background={background}"


@lru_cache(maxsize=1)
def _seed_users() -> tuple[UserRecord, ...]:
    demo_hash = hash_password("123456")
    return (
        UserRecord(
            id="org-1",
            name="Condomínio Solar",
            email="admin@solar.com",
            role="organization",
            avatar=avatar_for("Solar", "10b981&color=fff"),
            region="Centro",
            phone="11999999999",
            organization_data=OrganizationData(
                cnpj="12.345.678/0001-99",
                contact_name="Síndico Roberto",
                segment="Condomínio Residencial",
            ),
            password_hash=demo_hash,
        ),
        UserRecord(
            id="user-1",
            name="Carlos Morador",
            email="carlos@email.com",
            role="resident",
            avatar=avatar_for("Carlos"),
            region="Centro",
            address="Bloco A, Ap 42",
            phone="11988888888",
            cpf="123.456.789-00",
            household_size=4,
            password_hash=demo_hash,
        ),
    )


SEED_REQUESTS = (
    CollectionRequest(
        id="req-1",
        user_id="user-1",
        user_name="Carlos Morador",
        community_id="Centro",
        photo_url="https://images.unsplash.com/photo-1550989460-0adf9ea622e2?w=300",
        category="Electronic",
        action_type="Discard",
        address="Bloco A, Ap 42",
        description="TV antiga de tubo, pesada.",
        scheduled_at=datetime(2025, 5, 20, 14, 0, tzinfo=UTC),
        status="collected",
        created_at=datetime(2025, 5, 18, 10, 0, tzinfo=UTC),
    ),
    CollectionRequest(
        id="req-2",
        user_id="user-1",
        user_name="Carlos Morador",
        community_id="Centro",
        photo_url="https://images.unsplash.com/photo-1595429035839-c99c298ffdde?w=300",
        category="Furniture",
        action_type="Donate",
        address="Bloco A, Ap 42",
        description="Cadeira de escritório em bom estado.",
        scheduled_at=datetime(2025, 6, 10, 9, 0, tzinfo=UTC),
        status="queued",
        created_at=datetime(2025, 6, 8, 8, 0, tzinfo=UTC),
    ),
)

SEED_CHALLENGES = (
    Challenge(
        id="1",
        title="Semana Zero Plástico",
        description="Não descarte plásticos não-recicláveis por 7 dias.",
        xp_reward=500,
        type="weekly",
    ),
    Challenge(
        id="2",
        title="Indique 1 Vizinho",
        description="Traga um vizinho para o app reColeta.",
        xp_reward=200,
        type="special",
    ),
    Challenge(
        id="3",
        title="Compostagem Diária",
        description="Registre sua compostagem de hoje.",
        xp_reward=50,
        type="daily",
    ),
)

SEED_REWARDS = (
    Reward(
        id="r1",
        title="Desconto no IPTU Verde",
        cost=5000,
        description="Cupom de 5% de desconto no imposto municipal.",
        stock=10,
    ),
    Reward(
        id="r2",
        title="Kit Jardinagem",
        cost=1500,
        description="Luvas, pá e sementes entregues em casa.",
        stock=5,
    ),
    Reward(
        id="r3",
        title="Voucher Feira Orgânica",
        cost=800,
        description="R$ 20,00 para gastar na feira de domingo.",
        stock=50,
    ),
)

SEED_SCHEDULES = (
    CollectionSchedule(
        id="1", day_of_week="Segunda-feira", start_time="08:00", end_time="12:00",
        waste_type="Orgânico", sector="Todo o Bairro", region="Centro",
    ),
    CollectionSchedule(
        id="2", day_of_week="Segunda-feira", start_time="13:00", end_time="17:00",
        waste_type="Reciclável", sector="Área Comercial", region="Centro",
    ),
    CollectionSchedule(
        id="3", day_of_week="Quarta-feira", start_time="08:00", end_time="12:00",
        waste_type="Orgânico", sector="Todo o Bairro", region="Centro",
    ),
    CollectionSchedule(
        id="4", day_of_week="Sexta-feira", start_time="09:00", end_time="11:00",
        waste_type="Vidro", sector="Pontos de Entrega Voluntária", region="Centro",
    ),
    CollectionSchedule(
        id="5", day_of_week="Terça-feira", start_time="07:00", end_time="11:00",
        waste_type="Orgânico", sector="Ruas Principais", region="Vila Madalena",
    ),
)

SEED_ALERTS = (
    Alert(
        id="1",
        title="Mudança no Horário de Coleta",
        message="Devido ao feriado, a coleta de recicláveis passará às 09:00, não às 08:00.",
        type="info",
        created_at=_SEEDED_AT,
        created_by="Prefeitura",
        region="Centro",
    ),
    Alert(
        id="2",
        title="Ponto de Coleta Interditado",
        message="O ponto da Rua das Flores está em manutenção. Utilize o ponto da Praça Central.",
        type="warning",
        created_at=_SEEDED_AT,
        created_by="Gestão Ambiental",
        region="Centro",
    ),
    Alert(
        id="3",
        title="Campanha de Vidros",
        message="Traga seus vidros para a praça principal neste sábado.",
        type="info",
        created_at=_SEEDED_AT,
        created_by="ONG Local",
        region="Vila Madalena",
    ),
)

SEED_POSTS = (
    CommunityPost(
        id="1",
        author="Associação de Moradores",
        content="Atenção! O caminhão da coleta seletiva passará 1h mais cedo amanhã.",
        likes=24,
        comments=[
            Comment(
                id="c1",
                author="Carlos Vizinho",
                content="Obrigado pelo aviso!",
                created_at=_SEEDED_AT,
            )
        ],
        type="Alert",
        region="Centro",
        created_at=_SEEDED_AT,
    ),
    CommunityPost(
        id="2",
        author="Maria Silva (ONG Verde)",
        content="Neste sábado teremos oficina de compostagem na praça central.",
        likes=56,
        type="Project",
        region="Centro",
        created_at=_SEEDED_AT,
    ),
    CommunityPost(
        id="3",
        author="João Souza",
        content="Alguém sabe onde descartar baterias velhas aqui no bairro?",
        likes=8,
        type="Tip",
        region="Vila Madalena",
        created_at=_SEEDED_AT,
    ),
)

SEED_PROJECTS = (
    LocalProject(
        id="p1",
        title="Horta Comunitária",
        description="Manutenção semanal e plantio de novas mudas.",
        author_id="org-1",
        author_name="Gestor Ambiental",
        region="Centro",
        date="Sábados, 09:00",
        location="Praça Central",
        participants=["user-1", "org-1"],
        created_at=_SEEDED_AT,
    ),
    LocalProject(
        id="p2",
        title="Coleta de Eletrônicos",
        description="Ponto temporário para descarte de lixo eletrônico.",
        author_id="user-2",
        author_name="Ana Souza",
        region="Vila Madalena",
        date="25/11/2024",
        location="Escola do Bairro",
        participants=["user-2"],
        created_at=_SEEDED_AT,
    ),
)

SEED_COLLECTION_POINTS = (
    CollectionPoint(
        id="1", address="Praça da Sé, Centro", status=BinStatus.FULL,
        last_collection="2 dias atrás", type="Reciclável", region="Centro",
        lat=-23.550520, lng=-46.633308,
    ),
    CollectionPoint(
        id="2", address="Av. Paulista, 1578", status=BinStatus.OVERFLOWING,
        last_collection="1 dia atrás", type="Vidro", region="Centro",
        lat=-23.561414, lng=-46.655881,
    ),
    CollectionPoint(
        id="3", address="Rua Augusta, 1000", status=BinStatus.EMPTY,
        last_collection="Hoje", type="Orgânico", region="Centro",
        lat=-23.553974, lng=-46.655794,
    ),
    CollectionPoint(
        id="4", address="Vale do Anhangabaú", status=BinStatus.HALF,
        last_collection="3 dias atrás", type="Reciclável", region="Centro",
        lat=-23.547530, lng=-46.638420,
    ),
    CollectionPoint(
        id="5", address="Mercado Municipal", status=BinStatus.FULL,
        last_collection="4 dias atrás", type="Orgânico", region="Centro",
        lat=-23.541825, lng=-46.629330,
    ),
    CollectionPoint(
        id="6", address="Beco do Batman", status=BinStatus.FULL,
        last_collection="1 dia atrás", type="Reciclável", region="Vila Madalena",
        lat=-23.556858, lng=-46.686526,
    ),
    CollectionPoint(
        id="7", address="Praça Pôr do Sol", status=BinStatus.EMPTY,
        last_collection="Hoje", type="Vidro", region="Vila Madalena",
        lat=-23.554605, lng=-46.703417,
    ),
    CollectionPoint(
        id="8", address="Rua Fradique Coutinho", status=BinStatus.HALF,
        last_collection="2 dias atrás", type="Orgânico", region="Vila Madalena",
        lat=-23.563065, lng=-46.689625,
    ),
)


class UserRepository(Repository[UserRecord]):
    def __init__(self, store: RecordStore) -> None:
        super().__init__(store, NS_USERS, UserRecord, _seed_users, label="User")

    def find_by_email(self, email: str) -> UserRecord | None:
        """Case-insensitive email lookup."""
        normalized = email.strip().lower()
        for user in self.all():
            if user.email.lower() == normalized:
                return user
        return None


class SessionRepository(Repository[Session]):
    def __init__(self, store: RecordStore) -> None:
        super().__init__(store, NS_SESSIONS, Session, label="Session")

    def find_token(self, token: str) -> Session | None:
        for session in self.all():
            if session.token == token:
                return session
        return None


class RequestRepository(Repository[CollectionRequest]):
    def __init__(self, store: RecordStore) -> None:
        super().__init__(store, NS_REQUESTS, CollectionRequest, SEED_REQUESTS, "Collection request")


class ChallengeRepository(Repository[Challenge]):
    def __init__(self, store: RecordStore) -> None:
        super().__init__(store, NS_CHALLENGES, Challenge, SEED_CHALLENGES, "Challenge")


class SubmissionRepository(Repository[ChallengeSubmission]):
    def __init__(self, store: RecordStore) -> None:
        super().__init__(store, NS_SUBMISSIONS, ChallengeSubmission, label="Submission")


class RewardRepository(Repository[Reward]):
    def __init__(self, store: RecordStore) -> None:
        super().__init__(store, NS_REWARDS, Reward, SEED_REWARDS, "Reward")


class RedemptionRepository(Repository[RedemptionRequest]):
    def __init__(self, store: RecordStore) -> None:
        super().__init__(store, NS_REDEMPTIONS, RedemptionRequest, label="Redemption request")


class LedgerEntryRepository(Repository[LedgerEntry]):
    def __init__(self, store: RecordStore) -> None:
        super().__init__(store, NS_LEDGER, LedgerEntry, label="Ledger entry")


class JournalRepository(Repository[JournalEntry]):
    def __init__(self, store: RecordStore) -> None:
        super().__init__(store, NS_JOURNAL, JournalEntry, label="Journal entry")


class ScheduleRepository(Repository[CollectionSchedule]):
    def __init__(self, store: RecordStore) -> None:
        super().__init__(store, NS_SCHEDULES, CollectionSchedule, SEED_SCHEDULES, "Schedule")


class AlertRepository(Repository[Alert]):
    def __init__(self, store: RecordStore) -> None:
        super().__init__(store, NS_ALERTS, Alert, SEED_ALERTS, "Alert")


class PostRepository(Repository[CommunityPost]):
    def __init__(self, store: RecordStore) -> None:
        super().__init__(store, NS_POSTS, CommunityPost, SEED_POSTS, "Post")


class ProjectRepository(Repository[LocalProject]):
    def __init__(self, store: RecordStore) -> None:
        super().__init__(store, NS_PROJECTS, LocalProject, SEED_PROJECTS, "Project")


class CollectionPointRepository(Repository[CollectionPoint]):
    def __init__(self, store: RecordStore) -> None:
        super().__init__(
            store,
            NS_POINTS_OF_COLLECTION,
            CollectionPoint,
            SEED_COLLECTION_POINTS,
            "Collection point",
        )
