"""
Default corpora, one per evaluation mode.

Short everyday mobile-messaging phrases: greetings, status updates,
questions and reactions.
"""

JAPANESE_CORPUS = """おつかれさまです。
ありがとうございます。
いまからかえります。
了解しました。
よろしくおねがいします。
いまどこにいるの？
こんしゅうのどようびあいてる？
あとでれんらくするね。
おなかすいたなあ。
きょうのごはんなににする？
あしたのあさ、はちじにおきてね。
ごめん、ちょっとおくれる。
つきました。
いま、でんしゃにのったよ。
またあとでね。
きょうはいいおてんきですね。
おやすみなさい。
わかった、そうする。
テストのじゅんびできた？
すたーばっくすにいきたい。
あにめをみるのがたのしみ。
どらくてをやりたい。
こんしゅうのよていを教えて。
お誕生日おめでとう！
またあしたね。
おげんきですか？
はい、げんきです。
ちょっとまってね。
いま、むかっています。
あとででんわする。
おなかいっぱい。
ねむいなあ。
きょうもいちにちおつかれさま。
がんばってね。
おうえんしてるよ。
どこにいく？
なにをたべる？
これ、おいしいね。
またあそぼう。
しつれいします。"""

ENGLISH_CORPUS = """the quick brown fox jumps over the lazy dog.
see you later.
how are you doing?
can you hear me now?
i am on my way.
let's go for lunch.
did you see the news?
wait for me a second.
happy birthday to you!
i love programming.
good morning.
have a nice day.
thank you very much.
what are you doing?
where are you now?
call me back later.
i am so tired.
it is a beautiful day.
nice to meet you.
keep up the good work.
my watch is fell behind.
the world is a stage.
practice makes perfect.
time is money.
be careful.
don't worry be happy.
everything is gonna be alright.
i am proud of you.
take care.
good luck."""

ROMAJI_CORPUS = """otukaresama desu.
arigatou gozaimasu.
ima kara kaerimasu.
ryoukai simasita.
yorosiku onegaisimasu.
ima doko ni iru no?
konsyuu no doyoubi aiteru?
ato de renraku suru ne.
onaka suita naa.
kyou no gohan nani ni suru?
asita no asa hatiji ni okite ne.
gomen tyotto okureru.
tukimasita.
ima densya ni notta yo.
mata ato de ne.
kyou ha ii otenki desu ne.
oyasuminasai.
wakatta sou suru.
tesuto no jyunbi dekita?
suta-bakkusu ni ikitai.
anime wo miru noga tanosimi.
konjyousu wo osiete.
otanjyoubi omedetou!
mata asita ne.
ogenki desu ka?
hai genki desu.
tyotto matte ne.
ima mukatte imasu.
ato de denwa suru.
onaka ippai.
nemui naa.
kyou mo itiniti otukaresama.
ganbatte ne.
ouen siteru yo.
doko ni iku?
nani wo taberu?
kore oisii ne.
mata asobou.
siturei simasu."""

DEFAULT_CORPORA = {
    'kana': JAPANESE_CORPUS,
    'romanized': ROMAJI_CORPUS,
    'latin': ENGLISH_CORPUS,
}
