"""
Lexicon tables for the analysis core.

Read-only word lists used by the analyzer and the classifier.
The three sentiment lexicons are disjoint.
"""

POSITIVE_WORDS = frozenset([
    'excellent', 'amazing', 'fantastic', 'wonderful', 'great', 'good', 'love', 'perfect',
    'outstanding', 'brilliant', 'awesome', 'superb', 'magnificent', 'terrific', 'pleased',
    'satisfied', 'happy', 'delighted', 'impressed', 'recommend', 'helpful', 'friendly',
    'professional', 'efficient', 'quick', 'fast', 'easy', 'smooth', 'seamless', 'intuitive'
])

NEGATIVE_WORDS = frozenset([
    'terrible', 'awful', 'horrible', 'bad', 'worst', 'hate', 'disgusting', 'pathetic',
    'useless', 'broken', 'failed', 'error', 'problem', 'issue', 'bug', 'slow', 'difficult',
    'confusing', 'frustrated', 'disappointed', 'angry', 'upset', 'annoyed', 'poor', 'lacking',
    'missing', 'wrong', 'incorrect', 'unacceptable', 'unprofessional', 'rude', 'unhelpful'
])

NEUTRAL_WORDS = frozenset([
    'okay', 'fine', 'average', 'normal', 'standard', 'typical', 'regular', 'moderate',
    'acceptable', 'adequate', 'sufficient', 'reasonable', 'fair', 'decent', 'alright'
])

# Declaration order is the tie-break order for equally matched categories
CATEGORY_KEYWORDS = {
    'User Experience': ['ui', 'ux', 'interface', 'design', 'layout', 'navigation', 'usability', 'user-friendly'],
    'Performance': ['speed', 'fast', 'slow', 'loading', 'performance', 'lag', 'responsive', 'quick'],
    'Customer Service': ['support', 'service', 'staff', 'help', 'assistance', 'representative', 'agent'],
    'Product Quality': ['quality', 'product', 'feature', 'functionality', 'reliability', 'durability'],
    'Pricing': ['price', 'cost', 'expensive', 'cheap', 'value', 'money', 'affordable', 'pricing'],
    'Technical Issues': ['bug', 'error', 'crash', 'broken', 'glitch', 'technical', 'malfunction'],
    'Delivery/Shipping': ['delivery', 'shipping', 'package', 'arrived', 'delayed', 'on-time'],
    'Communication': ['communication', 'information', 'updates', 'notification', 'contact'],
    'Accessibility': ['accessibility', 'accessible', 'disability', 'screen reader', 'keyboard'],
    'Security': ['security', 'privacy', 'safe', 'secure', 'protection', 'data', 'personal']
}

# Matched as substrings of the lower-cased text
EMOTION_KEYWORDS = {
    'joy': ['happy', 'joy', 'excited', 'thrilled', 'delighted', 'pleased', 'cheerful', 'elated'],
    'anger': ['angry', 'mad', 'furious', 'irritated', 'annoyed', 'frustrated', 'outraged'],
    'fear': ['scared', 'afraid', 'worried', 'anxious', 'concerned', 'nervous', 'fearful'],
    'sadness': ['sad', 'disappointed', 'upset', 'depressed', 'unhappy', 'miserable', 'down'],
    'surprise': ['surprised', 'shocked', 'amazed', 'astonished', 'unexpected', 'wow'],
    'disgust': ['disgusted', 'revolted', 'appalled', 'repulsed', 'sickened', 'nauseated']
}

STOP_WORDS = frozenset([
    'this', 'that', 'with', 'have', 'will', 'from', 'they', 'know', 'want', 'been',
    'good', 'much', 'some', 'time', 'very', 'when', 'come', 'here', 'just', 'like',
    'long', 'make', 'many', 'over', 'such', 'take', 'than', 'them', 'well', 'were'
])

URGENT_TERMS = ('urgent', 'critical', 'emergency', 'immediately', 'asap', 'broken', 'not working')

HIGH_PRIORITY_TERMS = ('important', 'serious', 'major', 'significant', 'problem', 'issue')

NEGATIVE_ACTIONS = (
    'Follow up with customer within 24 hours',
    'Investigate the reported issue',
)

ESCALATION_ACTIONS = (
    'Escalate to management immediately',
    'Provide immediate resolution or workaround',
)

POSITIVE_ACTIONS = (
    'Thank the customer for positive feedback',
    'Share feedback with relevant team',
    'Consider featuring as testimonial',
)

CATEGORY_ACTIONS = {
    'Technical Issues': ('Forward to technical support team', 'Create bug report if applicable'),
    'Customer Service': ('Review with customer service manager', 'Provide additional training if needed'),
    'Product Quality': ('Forward to product development team', 'Consider for product roadmap'),
    'User Experience': ('Share with UX/UI design team', 'Consider for next design iteration'),
    'Performance': ('Forward to engineering team', 'Monitor system performance metrics'),
}
