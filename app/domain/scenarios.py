"""
The fixed E.Q.U.I.P. 360 scenario catalog.

Twenty leadership scenarios, each with four answer choices. Every choice
carries a 13-slot score vector in ``Metric`` order:
SA, SR, M, E, SS, B, EX, D, T, PS, CQ, TS, ER.

The catalog is validated once when this module is imported; a malformed
catalog raises :class:`CatalogError` and the application refuses to start.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..infrastructure.exceptions import CatalogError, UnknownChoiceError, UnknownScenarioError
from ..infrastructure.logging import get_logger
from .enums import ChoiceLetter
from .models import Choice, Scenario
from .schemas import CatalogInput

logger = get_logger(__name__)


def _scenario(number: int, title: str, context: str, question: str, choices: list[tuple]) -> dict:
    return {
        "id": f"scenario-{number}",
        "number": number,
        "title": title,
        "context": context,
        "question": question,
        "choices": [
            {"letter": letter, "text": text, "scores": scores} for letter, text, scores in choices
        ],
    }


SCENARIO_DATA: list[dict[str, Any]] = [
    _scenario(
        1,
        "The Public Correction",
        "During a high-stakes team meeting with executives present, a direct report shares data "
        "that you immediately recognize as incorrect. The error, if left uncorrected, could "
        "influence a major decision.",
        "How do you handle this situation?",
        [
            ("A", "Thank them for the contribution, then gently ask clarifying questions that "
                  "allow them to self-correct without public embarrassment.",
             [3, 4, 2, 3, 3, 3, 0, 2, 4, 4, 3, 3, 4]),
            ("B", "Interrupt immediately to correct the error. Accuracy is more important than "
                  "feelings in front of executives.",
             [1, 1, 3, 0, 1, 1, 3, 2, 0, 0, 1, 1, 0]),
            ("C", "Note the error mentally, let the meeting continue, and address it privately "
                  "afterward while sending a follow-up correction to attendees.",
             [4, 4, 2, 4, 3, 4, 0, 3, 4, 4, 4, 4, 4]),
            ("D", 'Signal to the team member nonverbally to pause, then offer to "add context" '
                  "that subtly corrects without attribution.",
             [3, 3, 2, 1, 2, 2, 1, 2, 2, 1, 2, 2, 2]),
        ],
    ),
    _scenario(
        2,
        "The Emotional Escalation",
        "A typically calm colleague becomes visibly upset during a one-on-one, raising their "
        "voice about workload concerns. Their frustration seems disproportionate to the "
        "immediate issue.",
        "What is your response?",
        [
            ("A", "Stay calm, acknowledge their frustration directly, and ask what's really "
                  "going on beneath the surface.",
             [4, 4, 2, 4, 3, 4, 0, 3, 4, 4, 4, 3, 4]),
            ("B", "Give them space to vent, then redirect the conversation back to actionable "
                  "solutions.",
             [3, 3, 3, 3, 2, 3, 1, 3, 3, 3, 3, 3, 3]),
            ("C", "Match their energy briefly to show you understand, then model calmness to "
                  "help them regulate.",
             [2, 2, 2, 3, 3, 2, 2, 2, 2, 2, 2, 2, 2]),
            ("D", "Firmly but kindly ask them to lower their voice, explaining that productive "
                  "conversation requires composure.",
             [2, 3, 2, 1, 2, 2, 2, 2, 2, 1, 2, 2, 1]),
        ],
    ),
    _scenario(
        3,
        "The Competing Priorities",
        "Two senior stakeholders have given you conflicting directives, both claiming executive "
        "sponsorship. Each priority requires immediate action, and you cannot satisfy both.",
        "How do you navigate this?",
        [
            ("A", "Escalate to your direct leader with a clear recommendation, requesting "
                  "explicit priority guidance.",
             [3, 3, 2, 2, 3, 3, 0, 3, 3, 3, 4, 3, 3]),
            ("B", "Choose the priority you believe has greater strategic impact, document your "
                  "reasoning, and inform both stakeholders.",
             [4, 3, 4, 2, 3, 4, 0, 4, 3, 2, 3, 2, 3]),
            ("C", "Bring both stakeholders together to discuss the conflict openly and reach "
                  "alignment.",
             [3, 2, 3, 3, 4, 3, 0, 3, 4, 4, 4, 4, 4]),
            ("D", "Attempt to partially satisfy both by splitting resources, accepting neither "
                  "will be done optimally.",
             [2, 2, 2, 2, 2, 1, 3, 1, 2, 2, 2, 2, 2]),
        ],
    ),
    _scenario(
        4,
        "The Underperformer",
        "A team member who was once a strong contributor has been consistently underperforming "
        "for three months. You've had two informal conversations, but nothing has changed. HR "
        "suggests documentation for a performance plan.",
        "What action do you take?",
        [
            ("A", "Have a direct, compassionate conversation exploring what has changed, "
                  "offering support while being clear about expectations and consequences.",
             [4, 3, 3, 4, 3, 4, 0, 4, 4, 4, 4, 3, 4]),
            ("B", "Begin the formal performance plan process. You've already tried the soft "
                  "approach twice.",
             [2, 3, 3, 1, 2, 2, 2, 3, 2, 1, 3, 2, 2]),
            ("C", "Assign them to a project better suited to their apparent current capacity "
                  "while monitoring improvement.",
             [3, 3, 2, 3, 3, 3, 1, 2, 3, 3, 2, 3, 3]),
            ("D", "Wait another month to see if things improve. They've earned patience through "
                  "past performance.",
             [1, 2, 1, 2, 1, 1, 4, 0, 1, 2, 1, 1, 1]),
        ],
    ),
    _scenario(
        5,
        "The Credit Question",
        "Your team delivered exceptional results on a visible project. During the executive "
        'presentation, your skip-level leader presents the work as "our department\'s '
        'achievement" without acknowledging your team specifically.',
        "How do you handle this?",
        [
            ("A", "Accept it gracefully. The work speaks for itself, and those who matter know "
                  "who did it.",
             [3, 4, 2, 2, 2, 3, 2, 2, 2, 2, 2, 3, 2]),
            ("B", "After the meeting, privately mention to your leader that you'd like your team "
                  "recognized, framing it as important for their morale.",
             [4, 3, 3, 3, 4, 4, 0, 3, 4, 3, 4, 3, 4]),
            ("C", "Find an opportunity during the presentation to naturally mention your team's "
                  "contribution without contradicting your leader.",
             [3, 2, 3, 2, 3, 3, 1, 3, 3, 2, 3, 2, 3]),
            ("D", "Ensure your team knows they're appreciated by celebrating with them privately, "
                  "regardless of executive recognition.",
             [3, 3, 3, 4, 3, 3, 1, 2, 3, 4, 2, 4, 3]),
        ],
    ),
    _scenario(
        6,
        "The Difficult Feedback",
        "You receive anonymous feedback from an engagement survey suggesting that some team "
        "members find you 'unapproachable' and 'intimidating,' despite your open-door policy "
        "and genuine care for the team.",
        "What is your response?",
        [
            ("A", "Reflect deeply on where this perception might come from, then make "
                  "intentional changes to your presence and communication style.",
             [4, 4, 3, 3, 3, 4, 0, 3, 4, 4, 3, 4, 4]),
            ("B", "Schedule individual conversations with team members to better understand "
                  "their experience and what would help.",
             [4, 3, 3, 4, 4, 4, 0, 4, 4, 4, 4, 4, 4]),
            ("C", "Acknowledge the feedback publicly in a team meeting, express genuine desire to "
                  "improve, and ask for direct input on how.",
             [3, 2, 3, 3, 3, 3, 0, 3, 3, 4, 4, 3, 3]),
            ("D", "Note the feedback but recognize that leadership sometimes requires being firm. "
                  "Not everyone will find you approachable, and that's okay.",
             [2, 3, 2, 1, 2, 2, 3, 2, 2, 1, 2, 2, 1]),
        ],
    ),
    _scenario(
        7,
        "The Urgent Request",
        "It's Friday at 4pm. A peer leader messages asking for urgent help on a presentation "
        "due Monday, saying their team is overwhelmed. You have personal plans this weekend "
        "that you've been looking forward to.",
        "How do you respond?",
        [
            ("A", "Offer to help for a defined period tonight, setting clear boundaries about "
                  "what you can contribute while protecting your weekend.",
             [3, 4, 3, 3, 3, 3, 0, 3, 3, 3, 3, 3, 3]),
            ("B", "Politely decline but offer to connect them with resources or team members who "
                  "might be available.",
             [3, 3, 2, 2, 3, 3, 1, 3, 2, 2, 3, 2, 2]),
            ("C", "Cancel your plans and help fully. Relationships and goodwill matter more than "
                  "one weekend.",
             [2, 1, 4, 4, 3, 2, 2, 2, 4, 3, 2, 3, 2]),
            ("D", "Ask probing questions about why this is urgent and whether the deadline can "
                  "shift before committing.",
             [4, 3, 2, 2, 2, 4, 0, 3, 2, 2, 3, 2, 2]),
        ],
    ),
    _scenario(
        8,
        "The Organizational Change",
        "Senior leadership announces a major restructuring that will significantly impact your "
        "team's responsibilities and reporting lines. Details are vague, and your team is "
        "anxious and seeking answers you don't have.",
        "How do you lead through this?",
        [
            ("A", "Be honest about what you don't know, share what you do know, and commit to "
                  "transparent communication as details emerge.",
             [4, 4, 2, 4, 3, 4, 0, 3, 4, 4, 4, 4, 4]),
            ("B", "Project confidence and focus the team on current work, minimizing discussion "
                  "of the change until you have real information.",
             [2, 3, 3, 2, 2, 2, 2, 2, 2, 1, 2, 2, 2]),
            ("C", "Advocate loudly to leadership for faster clarity, making clear the uncertainty "
                  "is affecting your team's performance.",
             [3, 2, 4, 3, 3, 3, 1, 4, 3, 2, 3, 2, 3]),
            ("D", "Create forums for the team to process emotions and concerns together while "
                  "maintaining focus on controllable factors.",
             [4, 3, 3, 4, 4, 4, 0, 3, 4, 4, 4, 4, 4]),
        ],
    ),
    _scenario(
        9,
        "The Ethical Gray Area",
        "You discover a process that technically complies with policy but feels ethically "
        "questionable. It benefits the company short-term but could harm customer trust if "
        "discovered. Others have been doing it for years.",
        "What do you do?",
        [
            ("A", "Raise your concerns through proper channels, documenting your perspective "
                  "while respecting that others may see it differently.",
             [4, 4, 3, 2, 2, 4, 0, 4, 4, 3, 3, 3, 3]),
            ("B", "If it's within policy, continue the practice but document your discomfort in "
                  "case questions arise later.",
             [2, 2, 2, 1, 2, 1, 4, 1, 1, 1, 2, 2, 1]),
            ("C", "Personally refuse to participate while not reporting others, and quietly "
                  "change your team's approach.",
             [3, 3, 3, 2, 2, 3, 1, 3, 3, 3, 2, 3, 3]),
            ("D", "Escalate immediately to compliance or ethics, treating this as a clear "
                  "violation of company values regardless of technical policy.",
             [3, 2, 4, 1, 2, 3, 0, 4, 3, 2, 3, 2, 2]),
        ],
    ),
    _scenario(
        10,
        "The Talent Poaching",
        "A high-performing team member confides that they received an attractive offer from a "
        "competitor. They seem open to being convinced to stay but also genuinely excited "
        "about the opportunity.",
        "How do you handle the conversation?",
        [
            ("A", "Listen fully to understand what attracts them to the opportunity, then "
                  "explore together whether those needs can be met here.",
             [4, 3, 3, 4, 4, 4, 0, 3, 4, 4, 4, 4, 4]),
            ("B", "Be direct that you want them to stay and immediately discuss what it would "
                  "take: compensation, role, growth opportunities.",
             [3, 2, 4, 2, 3, 3, 0, 4, 3, 2, 3, 3, 3]),
            ("C", "Support their decision-making process without trying to influence, "
                  "recognizing this is about their career, not your team.",
             [3, 4, 2, 4, 2, 3, 1, 2, 3, 4, 3, 2, 3]),
            ("D", "Begin contingency planning immediately while having the retention "
                  "conversation. Prepare for both outcomes.",
             [4, 4, 3, 2, 3, 4, 0, 4, 3, 2, 3, 3, 3]),
        ],
    ),
    _scenario(
        11,
        "The Failed Initiative",
        "A project you championed and invested significant political capital in has clearly "
        "failed. The results are visible to leadership, and some are questioning whether it "
        "was the right call.",
        "How do you respond?",
        [
            ("A", "Own the failure completely in front of leadership, share the lessons learned, "
                  "and propose adjustments for moving forward.",
             [4, 4, 3, 2, 3, 4, 0, 4, 4, 4, 4, 4, 4]),
            ("B", "Provide context about external factors that contributed to the outcome while "
                  "accepting your role in the decision.",
             [3, 3, 3, 2, 3, 3, 2, 3, 3, 2, 3, 3, 3]),
            ("C", "Focus quickly on the path forward rather than dwelling on what went wrong. "
                  "Action orientation is what leadership wants.",
             [2, 2, 4, 1, 2, 2, 2, 3, 2, 1, 2, 2, 2]),
            ("D", "Request time to conduct a thorough post-mortem before discussing next steps.",
             [3, 4, 2, 2, 2, 3, 1, 2, 3, 3, 3, 3, 3]),
        ],
    ),
    _scenario(
        12,
        "The Boundary Test",
        "An executive known for being demanding asks you to attend a meeting outside your "
        'normal scope because they "trust your judgment." Attending would mean missing a '
        "commitment to your own team.",
        "What do you do?",
        [
            ("A", "Decline respectfully, explaining your prior commitment while offering "
                  "alternative ways to provide input.",
             [4, 4, 2, 2, 3, 4, 0, 4, 3, 3, 4, 4, 3]),
            ("B", "Accept the invitation. Executive exposure and trust-building opportunities "
                  "are valuable for your career.",
             [2, 2, 3, 1, 3, 2, 2, 2, 3, 1, 2, 1, 2]),
            ("C", "Try to make both work by joining the executive meeting briefly and then "
                  "connecting with your team afterward.",
             [3, 2, 3, 2, 3, 3, 1, 3, 3, 2, 2, 2, 2]),
            ("D", "Ask your team if they can accommodate the change, being transparent about why "
                  "you would shift.",
             [3, 3, 2, 3, 3, 3, 1, 2, 3, 3, 3, 3, 3]),
        ],
    ),
    _scenario(
        13,
        "The Innovation vs. Execution Tension",
        "Your team has an opportunity to experiment with a new approach that could yield "
        "significant improvements but carries execution risk. Leadership is pushing for "
        "predictable delivery.",
        "How do you balance this tension?",
        [
            ("A", "Propose a bounded experiment (small scale, clear success criteria, defined "
                  "timeline) that manages risk while allowing innovation.",
             [4, 4, 3, 2, 3, 4, 0, 4, 3, 3, 4, 3, 3]),
            ("B", "Prioritize delivery over experimentation. There will be time to innovate "
                  "after you've built more trust.",
             [3, 4, 2, 2, 2, 2, 2, 3, 3, 2, 3, 3, 2]),
            ("C", "Push back on leadership, making the case that innovation is essential even if "
                  "it means some delivery variation.",
             [2, 2, 4, 1, 3, 3, 1, 4, 2, 2, 3, 2, 2]),
            ("D", "Run the experiment quietly within your team while maintaining delivery "
                  "commitments publicly.",
             [2, 2, 3, 1, 2, 2, 3, 2, 1, 1, 1, 2, 1]),
        ],
    ),
    _scenario(
        14,
        "The Personal Crisis",
        "You're dealing with a significant personal challenge that's affecting your focus and "
        "energy. Your team hasn't noticed yet, but you're not operating at your best.",
        "How do you manage this?",
        [
            ("A", "Share appropriately with your leader and team that you're dealing with "
                  "something personal, without over-disclosing, and adjust commitments "
                  "accordingly.",
             [4, 3, 2, 3, 3, 4, 0, 3, 4, 4, 4, 4, 4]),
            ("B", "Compartmentalize and maintain performance standards. Personal and "
                  "professional should remain separate.",
             [2, 4, 3, 1, 2, 2, 2, 3, 2, 1, 2, 2, 2]),
            ("C", "Take a formal leave or reduced schedule to address the situation properly "
                  "before it affects your work more visibly.",
             [3, 3, 2, 2, 2, 3, 0, 3, 3, 3, 2, 3, 3]),
            ("D", "Quietly delegate more to capable team members while you manage through the "
                  "difficult period.",
             [3, 3, 2, 2, 3, 3, 1, 2, 2, 2, 2, 3, 2]),
        ],
    ),
    _scenario(
        15,
        "The Team Conflict",
        "Two strong contributors on your team have developed a personal conflict that's "
        "affecting team dynamics. Both have come to you separately to complain about the other.",
        "How do you address this?",
        [
            ("A", "Bring them together for a facilitated conversation focused on working "
                  "relationship expectations, not personality differences.",
             [4, 3, 3, 3, 4, 4, 0, 4, 4, 4, 4, 4, 4]),
            ("B", "Work with each individually to help them manage their reactions and focus on "
                  "professional behavior.",
             [3, 3, 2, 4, 3, 3, 1, 2, 3, 3, 3, 3, 3]),
            ("C", "Set clear expectations that personal conflict cannot affect work, then monitor "
                  "closely with consequences for violations.",
             [2, 3, 3, 1, 2, 2, 1, 3, 2, 1, 3, 2, 2]),
            ("D", "Restructure work to minimize their interaction while the conflict naturally "
                  "resolves over time.",
             [2, 3, 1, 2, 2, 2, 3, 1, 2, 2, 2, 2, 2]),
        ],
    ),
    _scenario(
        16,
        "The Promotion Decision",
        "You have one promotion slot and two deserving candidates. One is slightly more "
        "qualified but may leave soon anyway. The other is loyal, steady, and staying "
        "long-term but slightly less ready.",
        "How do you approach this decision?",
        [
            ("A", "Promote the more qualified candidate based on merit, regardless of flight "
                  "risk. Rewarding performance is the right signal.",
             [3, 3, 3, 1, 2, 3, 1, 4, 3, 2, 3, 2, 3]),
            ("B", "Have transparent conversations with both about where they stand and what the "
                  "promotion timeline looks like for each.",
             [4, 3, 3, 4, 4, 4, 0, 3, 4, 4, 4, 4, 4]),
            ("C", "Promote the loyal candidate who will continue to contribute, using the "
                  "promotion to accelerate their development.",
             [3, 3, 2, 3, 3, 3, 2, 2, 3, 3, 2, 4, 3]),
            ("D", "Advocate for a second slot or creative solution that recognizes both "
                  "contributions appropriately.",
             [3, 2, 4, 3, 4, 3, 0, 3, 3, 3, 3, 4, 3]),
        ],
    ),
    _scenario(
        17,
        "The Silent Resistance",
        "You've introduced a new process that you believe is better for the team. There's no "
        "open pushback, but adoption is slow and you sense passive resistance.",
        "What do you do?",
        [
            ("A", "Create safe forums to surface concerns openly, demonstrating genuine "
                  "willingness to adapt based on feedback.",
             [4, 3, 3, 4, 4, 4, 0, 3, 4, 4, 4, 4, 4]),
            ("B", "Increase accountability measures. If the process is right, people need to "
                  "follow it regardless of preferences.",
             [2, 3, 4, 1, 2, 2, 2, 3, 2, 1, 2, 2, 2]),
            ("C", "Identify early adopters and champions to help drive adoption through peer "
                  "influence rather than top-down mandate.",
             [4, 3, 3, 3, 4, 4, 0, 3, 4, 3, 3, 4, 4]),
            ("D", "Re-evaluate whether the process is actually necessary. Maybe the resistance is "
                  "telling you something.",
             [3, 3, 2, 2, 2, 3, 1, 2, 3, 3, 3, 3, 3]),
        ],
    ),
    _scenario(
        18,
        "The Information Asymmetry",
        "You learn information about upcoming changes that will affect your team, but you've "
        "been asked to keep it confidential temporarily. Team members are already speculating "
        "and anxious.",
        "How do you navigate this?",
        [
            ("A", "Acknowledge that there are things you cannot share yet, validate their "
                  "uncertainty, and commit to transparency when possible.",
             [4, 4, 2, 4, 3, 4, 0, 3, 4, 4, 4, 4, 4]),
            ("B", "Maintain strict confidentiality without acknowledging you know anything. "
                  "Protecting the process is most important.",
             [2, 4, 2, 1, 2, 2, 2, 2, 2, 1, 2, 2, 1]),
            ("C", "Share what you can within the boundaries of confidentiality, helping manage "
                  "speculation without breaking trust.",
             [3, 3, 2, 3, 3, 3, 1, 3, 3, 3, 3, 3, 3]),
            ("D", "Push leadership to communicate faster or allow you to share more. The anxiety "
                  "is affecting productivity.",
             [3, 2, 4, 3, 3, 3, 0, 4, 3, 3, 3, 2, 3]),
        ],
    ),
    _scenario(
        19,
        "The Visible Mistake",
        "You made an error in judgment that affected a client relationship. Your team knows, "
        "your leader knows, and the client is understandably frustrated. The situation is "
        "recoverable but damaged.",
        "How do you move forward?",
        [
            ("A", "Own it completely, apologize directly to the client, share what you've "
                  "learned, and implement changes to prevent recurrence.",
             [4, 4, 3, 3, 3, 4, 0, 4, 4, 4, 4, 4, 4]),
            ("B", "Focus primarily on the fix and future prevention. Dwelling on the mistake "
                  "doesn't help anyone.",
             [2, 3, 4, 2, 2, 2, 2, 3, 2, 2, 2, 2, 2]),
            ("C", "Ask a colleague to help repair the relationship since your credibility with "
                  "the client is damaged.",
             [3, 3, 2, 2, 3, 3, 2, 2, 2, 2, 3, 3, 2]),
            ("D", "Use this as a learning moment for your team. Demonstrating how to handle "
                  "mistakes builds trust and models growth.",
             [4, 3, 3, 3, 4, 4, 0, 3, 4, 4, 4, 4, 4]),
        ],
    ),
    _scenario(
        20,
        "The Leadership Crossroads",
        "You're offered a significant promotion that would mean leaving a team you've built "
        "and genuinely care about. The timing feels premature. The team still needs "
        "development, and you have unfinished business.",
        "How do you decide?",
        [
            ("A", "Accept the opportunity. Your growth benefits everyone eventually, and holding "
                  "yourself back isn't the answer.",
             [3, 2, 4, 2, 3, 3, 1, 4, 3, 2, 3, 2, 3]),
            ("B", "Negotiate timing or transition support that allows you to set your team up for "
                  "success before fully moving.",
             [4, 4, 3, 4, 4, 4, 0, 4, 4, 4, 4, 4, 4]),
            ("C", "Decline for now and communicate clearly what conditions would make you ready. "
                  "The opportunity will return.",
             [3, 4, 2, 4, 2, 3, 1, 2, 3, 3, 3, 4, 3]),
            ("D", "Seek counsel from trusted mentors about how to weigh your personal growth "
                  "against team obligations.",
             [4, 3, 2, 3, 3, 4, 0, 2, 3, 3, 3, 3, 3]),
        ],
    ),
]


class ScenarioCatalog:
    """Ordered, read-only collection of validated scenarios."""

    def __init__(self, scenarios: Sequence[Scenario]):
        self._scenarios: tuple[Scenario, ...] = tuple(scenarios)
        self._by_id: dict[str, Scenario] = {s.id: s for s in self._scenarios}
        self._index_by_id: dict[str, int] = {s.id: i for i, s in enumerate(self._scenarios)}

    def __len__(self) -> int:
        return len(self._scenarios)

    def __iter__(self) -> Iterator[Scenario]:
        return iter(self._scenarios)

    def __getitem__(self, index: int) -> Scenario:
        return self._scenarios[index]

    def __contains__(self, scenario_id: object) -> bool:
        return scenario_id in self._by_id

    def get(self, scenario_id: str) -> Scenario | None:
        return self._by_id.get(scenario_id)

    def get_required(self, scenario_id: str) -> Scenario:
        scenario = self._by_id.get(scenario_id)
        if scenario is None:
            raise UnknownScenarioError(scenario_id)
        return scenario

    def index_of(self, scenario_id: str) -> int:
        if scenario_id not in self._index_by_id:
            raise UnknownScenarioError(scenario_id)
        return self._index_by_id[scenario_id]

    def choice(self, scenario_id: str, letter: ChoiceLetter | str) -> Choice:
        """Return the choice for ``letter`` on ``scenario_id`` or raise a lookup error."""
        scenario = self.get_required(scenario_id)
        try:
            normalised = ChoiceLetter(letter)
        except ValueError:
            raise UnknownChoiceError(scenario_id, str(letter)) from None
        choice = scenario.choice(normalised)
        if choice is None:
            raise UnknownChoiceError(scenario_id, str(letter))
        return choice


def build_catalog(data: list[dict[str, Any]]) -> ScenarioCatalog:
    """
    Validate raw scenario data and build the catalog.

    Raises:
        CatalogError: If any scenario, choice or score vector is malformed
    """
    try:
        validated = CatalogInput(scenarios=data)
    except PydanticValidationError as e:
        errors = [
            {"loc": ".".join(str(x) for x in err["loc"]), "msg": err["msg"]} for err in e.errors()
        ]
        logger.error("Scenario catalog failed validation with %d errors", len(errors))
        raise CatalogError(errors[0]["msg"], details={"errors": errors}) from e

    scenarios = [
        Scenario(
            id=s.id,
            number=s.number,
            title=s.title,
            context=s.context,
            question=s.question,
            choices=tuple(
                Choice(letter=c.letter, text=c.text, scores=tuple(c.scores)) for c in s.choices
            ),
        )
        for s in validated.scenarios
    ]
    logger.debug("Loaded scenario catalog with %d scenarios", len(scenarios))
    return ScenarioCatalog(scenarios)


CATALOG = build_catalog(SCENARIO_DATA)


def get_catalog() -> ScenarioCatalog:
    return CATALOG
