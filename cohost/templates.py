"""
応答テンプレート集（読み上げはスペイン語）
"""
from .models import Sentiment, Topic

# 同じ話題が短時間に繰り返されたとき
REPEAT_TOPIC_RESPONSES = [
    "¿Otra vez con lo mismo? El chat tiene memoria de pez.",
    "Eso ya lo dijeron hace nada. Pero gracias por el eco.",
    "Déjà vu... juraría que ya leí esto.",
    "El disco rayado del chat ataca de nuevo.",
    "Sí, sí, ya nos quedó claro la primera vez.",
    "Repetirlo no lo hace más cierto, pero lo intentas.",
    "Modo bucle activado. Nadie lo pidió, pero aquí estamos.",
    "Tema repetido. Originalidad, te estamos buscando.",
]

_PERFORMANCE_RESPONSES = [
    "Ah, la crítica constructiva. Tan sutil como un ladrillo en la cara.",
    "Todo un experto en rendimiento ajeno, ya veo.",
    "Ganar o perder, lo importante es tener excusas preparadas.",
    "Qué nivel... de opinar desde el sillón.",
    "GG, WP, y todas esas siglas que hacen sentir profesional a la gente.",
]

TOPIC_RESPONSES = {
    Topic.GAMING: [
        "¡Ah sí! Los juegos, esa actividad tan productiva. Sigamos gastando vida en pixels.",
        "Otro experto en videojuegos. El mundo necesitaba más de esos.",
        "Sí, es un juego. Con botones y todo, impresionante.",
        "Hablar de juegos en un stream de juegos. Qué giro tan inesperado.",
        "Seguro que tú lo jugarías mejor, como todo el chat.",
    ],
    Topic.STREAMING: [
        "Sí, es un stream. Qué observador. Sherlock Holmes estaría orgulloso.",
        "En directo y sin red de seguridad, como debe ser.",
        "El stream sigue en pie, contra todo pronóstico.",
        "Gracias por recordarnos que esto se transmite. Casi lo olvido.",
        "Otro análisis profundo del directo. Tomo nota... mental.",
    ],
    Topic.MUSIC: [
        "Música... porque hablar es muy mainstream, ¿no?",
        "Gran gusto musical. Bueno, gusto al menos.",
        "Esa canción tiene más vueltas que este chat.",
        "Ponle volumen, a ver si así mejora.",
        "El DJ del chat ha hablado. Que tiemble Spotify.",
    ],
    Topic.ENGAGEMENT: [
        "¡Ah! El clásico 'dale like y suscríbete'. Qué original y nada desesperado.",
        "Seguir el canal: la decisión más sensata que tomarás hoy.",
        "Apoyo al canal detectado. Se agradece, de verdad... creo.",
        "Los números suben y mi ego también.",
        "Un follow más y quizá hasta sonría.",
    ],
    Topic.SKILL: _PERFORMANCE_RESPONSES,
    Topic.SUCCESS: _PERFORMANCE_RESPONSES,
    Topic.FAILURE: _PERFORMANCE_RESPONSES,
    Topic.HUMOR: [
        "¡Qué gracioso! Me estoy riendo tanto que casi se me mueve un músculo de la cara.",
        "Jaja, sí, muy bueno. Lo apunto en mi libro de chistes que nunca abriré.",
        "El humor del chat: impredecible y casi siempre involuntario.",
        "Risas enlatadas activadas.",
        "Tanto 'jaja' me preocupa. ¿Estás bien?",
    ],
    Topic.GREETING: [
        "¡Miren! Alguien que sabe saludar. Todo un fenómeno social.",
        "Hola, hola. Bienvenido al lugar más productivo de internet.",
        "Un saludo, qué educación. Ya casi no se ve eso.",
        "Llegó alguien nuevo. Escondan los spoilers.",
        "Bienvenido, ponte cómodo y no toques nada.",
    ],
    Topic.QUESTION: [
        "Ooh, una pregunta. Qué conceptual. Déjame consultar mi bola de cristal...",
        "Buena pregunta. La respuesta, como siempre, es 'depende'.",
        "Preguntas difíciles un martes cualquiera.",
        "Lo preguntaría a un experto, pero solo estoy yo.",
        "Esa pregunta merece un documental de tres horas.",
    ],
}

SENTIMENT_RESPONSES = {
    Sentiment.POSITIVE: [
        "¡Qué optimista! Me gusta esa energía... aunque sea un poco ingenua.",
        "¡Vaya! Alguien se tomó sus vitaminas de positividad hoy.",
        "Tanto entusiasmo me da miedo... pero está bien, supongo.",
        "¡Qué hermoso! Casi se me cae una lágrima... casi.",
        "Este comentario brilla más que mi futuro, y eso ya es decir algo.",
        "Buena vibra detectada. Que no se te acabe.",
        "Tanta alegría debería estar regulada.",
        "Me alegra que alguien se lo esté pasando bien.",
    ],
    Sentiment.NEGATIVE: [
        "Ah, el pesimismo clásico. Nunca pasa de moda, ¿verdad?",
        "Veo que alguien despertó con el pie izquierdo... y el derecho también.",
        "Qué originalidad quejarse. Nadie había pensado en eso antes...",
        "¡Perfecto! Justo lo que necesitaba para alegrar mi día.",
        "Gracias por ese rayito de sol. Realmente iluminas el chat.",
        "Tu negatividad es tan refrescante como un cubito de hielo en el desierto.",
        "Respira hondo. Es solo internet.",
        "Anotado en el buzón de quejas. Que nadie revisa.",
    ],
    Sentiment.NEUTRAL: [
        "Interesante... si es que podemos llamar 'interesante' a esto.",
        "Vaya comentario más... existente.",
        "Gracias por ese aporte tan... único.",
        "El chat siempre sorprende con su... creatividad.",
        "Qué profundo. Casi filosófico, diría yo.",
        "Otro comentario para los anales de la historia... o no.",
        "Leído y procesado. Sin comentarios adicionales.",
        "Ni frío ni caliente. Como el café que se me olvidó.",
    ],
}

FALLBACK_RESPONSES = [
    "Qué comentario tan... especial.",
    "El chat está que arde hoy... de aburrimiento.",
    "Gracias por ese aporte tan valioso para la humanidad.",
    "¡Increíble! Otro comentario para enmarcar.",
    "La sabiduría del chat nunca deja de sorprenderme... o no.",
    "¡Qué suerte tengo de tener espectadores tan... únicos!",
    "No tengo opinión sobre eso... por ahora.",
    "Me quedé sin palabras. Literalmente.",
    "Eso es... algo. Definitivamente algo.",
    "Procesando... procesando... nada.",
]

DISCOURSE_MARKERS = [
    "Bueno,",
    "Mira,",
    "A ver,",
    "Pues",
    "Sinceramente,",
    "No sé tú, pero",
]

HEDGING_SUFFIXES = [
    " ...o eso creo.",
    " Pero qué sé yo.",
    " Digo yo.",
    " Aunque puedo estar equivocado.",
    " Opinión personal, claro.",
]
